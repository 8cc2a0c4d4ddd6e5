"""
IAM role and instance profile for the fleet.

The role trusts only the EC2 service and carries the AWS managed
AmazonSSMManagedInstanceCore policy, which is all the SSM agent needs. The
instance profile wraps the role so the launch template can reference it.
"""

from typing import Mapping

import pulumi
import pulumi_aws as aws

from components._helpers import assume_role_policy

ID: str = "webfleet:aws:InstanceIdentity"

EC2_PRINCIPAL = "ec2.amazonaws.com"
SSM_CORE_POLICY_ARN = "arn:aws:iam::aws:policy/AmazonSSMManagedInstanceCore"


class InstanceIdentity(pulumi.ComponentResource):
    """Role (EC2 trust + SSM core policy) and the instance profile wrapping it."""

    def __init__(
        self,
        name: str,
        tags: Mapping[str, str],
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Args:
            name: Pulumi resource name prefix.
            tags: Tags for the role and the instance profile.
            opts: Options for the component.

        Outputs (set on self, registered for the component):
            instance_profile_name: Name to put in the launch template.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.role = aws.iam.Role(
            resource_name=f"{name}-role",
            assume_role_policy=assume_role_policy(EC2_PRINCIPAL),
            tags=dict(tags),
            opts=child_opts,
        )
        aws.iam.RolePolicyAttachment(
            resource_name=f"{name}-ssm-core",
            policy_arn=SSM_CORE_POLICY_ARN,
            role=self.role.name,
            opts=child_opts,
        )
        self.instance_profile = aws.iam.InstanceProfile(
            resource_name=f"{name}-profile",
            role=self.role.name,
            tags=dict(tags),
            opts=child_opts,
        )

        self.instance_profile_name: pulumi.Output[str] = self.instance_profile.name
        self.register_outputs({"instance_profile_name": self.instance_profile_name})
