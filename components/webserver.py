"""
Top-level component: the whole web fleet stack as one resource graph.

Declares, in dependency order: environment lookups (subnets, AMI), security
groups, SSM endpoints, instance identity, fleet (launch template + auto
scaling group), and the load balancer with its listener path and attachment.
``exports`` holds the stack outputs under their fixed keys.
"""

import pulumi

from components.endpoints import SsmEndpoints
from components.fleet import WebserverFleet
from components.identity import InstanceIdentity
from components.ingress import LoadBalancedIngress
from components.lookups import EnvironmentLookups
from components.security import SecurityBoundaries
from config import EnvironmentInputs, StackConfig

ID: str = "webfleet:aws:WebserverStack"


class WebserverStack(pulumi.ComponentResource):
    """
    Load-balanced auto scaling web fleet with optional DNS and TLS.

    Child components: SecurityBoundaries, SsmEndpoints, InstanceIdentity,
    WebserverFleet, LoadBalancedIngress.
    """

    def __init__(
        self,
        name: str,
        config: StackConfig,
        environment: EnvironmentInputs,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Build every resource of the stack.

        Args:
            name: Pulumi resource name; child components are named
                ``<name>-<part>``.
            config: Stack settings (region, sizing, tags, DNS toggle).
            environment: VPC and hosted zone identifiers.
            opts: Options for the component; pass ``providers`` to pin the
                AWS provider for every child and lookup.

        Outputs (set on self, registered for the component):
            exports: Mapping of stack output name to value; ``dnsRecord`` is
                None when ``config.create_dns_record`` is False.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        tags = config.default_tags
        vpc_id = environment.vpc_id

        # Single invoke per lookup; every consumer below shares the same Output.
        self.lookups = EnvironmentLookups.resolve(
            vpc_id, opts=pulumi.InvokeOptions(parent=self)
        )

        self.security = SecurityBoundaries(
            name=f"{name}-security",
            vpc_id=vpc_id,
            tags=tags,
            opts=child_opts,
        )

        self.endpoints = SsmEndpoints(
            name=f"{name}-endpoints",
            region=config.aws_region,
            vpc_id=vpc_id,
            subnet_ids=self.lookups.subnet_ids,
            security_group_id=self.security.instance_group_id,
            tags=tags,
            opts=child_opts,
        )

        self.identity = InstanceIdentity(
            name=f"{name}-identity",
            tags=tags,
            opts=child_opts,
        )

        self.fleet = WebserverFleet(
            name=f"{name}-fleet",
            instance_type=config.instance_type,
            ami_id=self.lookups.ami_id,
            subnet_ids=self.lookups.subnet_ids,
            security_group_id=self.security.instance_group_id,
            instance_profile_name=self.identity.instance_profile_name,
            min_size=config.min_size,
            max_size=config.max_size,
            desired_capacity=config.desired_capacity,
            tags=tags,
            opts=child_opts,
        )

        self.ingress = LoadBalancedIngress(
            name=f"{name}-ingress",
            vpc_id=vpc_id,
            subnet_ids=self.lookups.subnet_ids,
            security_group_id=self.security.load_balancer_group_id,
            autoscaling_group_name=self.fleet.autoscaling_group_name,
            zone_id=environment.route53_zone_id,
            create_dns_record=config.create_dns_record,
            dns_name=config.dns_name,
            tags=tags,
            opts=child_opts,
        )

        self.exports: dict[str, pulumi.Output[str] | None] = {
            "loadBalancerDns": self.ingress.load_balancer_dns,
            "dnsRecord": self.ingress.dns_record_fqdn,
            "ssmEndpointId": self.endpoints.ssm_endpoint_id,
            "ec2MessagesEndpointId": self.endpoints.ec2_messages_endpoint_id,
            "ssmmessagesEndpointId": self.endpoints.ssmmessages_endpoint_id,
        }
        self.register_outputs(self.exports)
