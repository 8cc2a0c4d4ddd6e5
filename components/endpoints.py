"""
Interface VPC endpoints for Session Manager.

Instances reach SSM through private endpoints (ssm, ec2messages,
ssmmessages) in every resolved subnet, with private DNS so the agent's default
hostnames resolve to them. Endpoints use the instance security group.
"""

from typing import Mapping, Sequence

import pulumi
import pulumi_aws as aws

from components._helpers import endpoint_service_name

ID: str = "webfleet:aws:SsmEndpoints"

# Attribute name on the component -> AWS service.
SSM_SERVICES: list[tuple[str, str]] = [
    ("ssm", "ssm"),
    ("ec2_messages", "ec2messages"),
    ("ssmmessages", "ssmmessages"),
]


class SsmEndpoints(pulumi.ComponentResource):
    """Three interface endpoints: ssm, ec2messages, ssmmessages."""

    def __init__(
        self,
        name: str,
        region: str,
        vpc_id: pulumi.Input[str],
        subnet_ids: pulumi.Input[Sequence[str]],
        security_group_id: pulumi.Input[str],
        tags: Mapping[str, str],
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the ssm, ec2messages and ssmmessages endpoints.

        Args:
            name: Pulumi resource name prefix.
            region: Region used in each endpoint service name.
            vpc_id: VPC that hosts the endpoints.
            subnet_ids: Subnets to place endpoint interfaces in (all resolved subnets).
            security_group_id: Instance security group attached to every endpoint.
            tags: Tags for the endpoints.
            opts: Options for the component.

        Outputs (set on self, registered for the component):
            ssm_endpoint_id: Id of the ssm endpoint.
            ec2_messages_endpoint_id: Id of the ec2messages endpoint.
            ssmmessages_endpoint_id: Id of the ssmmessages endpoint.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.endpoints: dict[str, aws.ec2.VpcEndpoint] = {}
        for attr, service in SSM_SERVICES:
            self.endpoints[attr] = aws.ec2.VpcEndpoint(
                resource_name=f"{name}-{service}",
                vpc_id=vpc_id,
                service_name=endpoint_service_name(region, service),
                vpc_endpoint_type="Interface",
                subnet_ids=subnet_ids,
                security_group_ids=[security_group_id],
                private_dns_enabled=True,
                tags=dict(tags),
                opts=child_opts,
            )

        self.ssm_endpoint_id: pulumi.Output[str] = self.endpoints["ssm"].id
        self.ec2_messages_endpoint_id: pulumi.Output[str] = self.endpoints["ec2_messages"].id
        self.ssmmessages_endpoint_id: pulumi.Output[str] = self.endpoints["ssmmessages"].id
        self.register_outputs(
            {
                "ssm_endpoint_id": self.ssm_endpoint_id,
                "ec2_messages_endpoint_id": self.ec2_messages_endpoint_id,
                "ssmmessages_endpoint_id": self.ssmmessages_endpoint_id,
            }
        )
