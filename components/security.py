"""
Security groups for the load balancer and the EC2 fleet.

The load balancer group accepts HTTP and HTTPS from anywhere. The instance
group accepts HTTP only from the load balancer group, so instances are never
reachable directly from the internet. Both allow all egress. Rules are
separate ``SecurityGroupRule`` resources so either side can change without
replacing the group.
"""

from typing import Mapping

import pulumi
import pulumi_aws as aws

ID: str = "webfleet:aws:SecurityBoundaries"

ANYWHERE: list[str] = ["0.0.0.0/0"]


class SecurityBoundaries(pulumi.ComponentResource):
    """
    Load balancer security group (public 80/443) and instance security group
    (80 from the load balancer only).
    """

    def __init__(
        self,
        name: str,
        vpc_id: pulumi.Input[str],
        tags: Mapping[str, str],
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create both security groups and their rules.

        Args:
            name: Pulumi resource name prefix for the groups and rules.
            vpc_id: VPC that owns both groups.
            tags: Tags applied to both groups.
            opts: Options for the component (e.g. parent, providers).

        Outputs (set on self, registered for the component):
            load_balancer_group_id: Attach to the ALB.
            instance_group_id: Attach to instances and VPC endpoints.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.load_balancer_group = aws.ec2.SecurityGroup(
            resource_name=f"{name}-lb",
            vpc_id=vpc_id,
            description="Security group for Load Balancer",
            tags=dict(tags),
            opts=child_opts,
        )
        self.instance_group = aws.ec2.SecurityGroup(
            resource_name=f"{name}-instance",
            vpc_id=vpc_id,
            description="Security group for EC2 instances",
            tags=dict(tags),
            opts=child_opts,
        )

        for port, label in [(443, "https"), (80, "http")]:
            aws.ec2.SecurityGroupRule(
                resource_name=f"{name}-{label}-inbound",
                type="ingress",
                security_group_id=self.load_balancer_group.id,
                protocol="tcp",
                from_port=port,
                to_port=port,
                cidr_blocks=ANYWHERE,
                description=f"{label.upper()} inbound",
                opts=child_opts,
            )
        self._allow_all_egress(f"{name}-lb-egress", self.load_balancer_group, child_opts)

        # Only source is the load balancer group; no CIDR ingress on the fleet.
        aws.ec2.SecurityGroupRule(
            resource_name=f"{name}-instance-http-inbound",
            type="ingress",
            security_group_id=self.instance_group.id,
            protocol="tcp",
            from_port=80,
            to_port=80,
            source_security_group_id=self.load_balancer_group.id,
            description="HTTP inbound from load balancer",
            opts=child_opts,
        )
        self._allow_all_egress(f"{name}-instance-egress", self.instance_group, child_opts)

        self.load_balancer_group_id: pulumi.Output[str] = self.load_balancer_group.id
        self.instance_group_id: pulumi.Output[str] = self.instance_group.id
        self.register_outputs(
            {
                "load_balancer_group_id": self.load_balancer_group_id,
                "instance_group_id": self.instance_group_id,
            }
        )

    @staticmethod
    def _allow_all_egress(
        resource_name: str,
        group: aws.ec2.SecurityGroup,
        opts: pulumi.ResourceOptions,
    ) -> aws.ec2.SecurityGroupRule:
        return aws.ec2.SecurityGroupRule(
            resource_name=resource_name,
            type="egress",
            security_group_id=group.id,
            protocol="-1",
            from_port=0,
            to_port=0,
            cidr_blocks=ANYWHERE,
            description="Egress",
            opts=opts,
        )
