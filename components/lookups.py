"""
Live environment lookups: subnets of the target VPC and the latest AL2023 AMI.

Each lookup is a single invoke whose ``Output`` is kept on the returned object,
so every declaration that needs the subnets or the image id reuses the same
result instead of querying again.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

AMI_NAME_PATTERN = "al2023-ami-*-kernel*x86_64*"
AMI_OWNER = "amazon"


@dataclass(frozen=True)
class EnvironmentLookups:
    """Resolved subnet ids (VPC order) and AMI id, one invoke each."""

    subnet_ids: pulumi.Output[list[str]]
    ami_id: pulumi.Output[str]

    @classmethod
    def resolve(
        cls,
        vpc_id: str,
        opts: pulumi.InvokeOptions | None = None,
    ) -> "EnvironmentLookups":
        subnets = aws.ec2.get_subnets_output(
            filters=[aws.ec2.GetSubnetsFilterArgs(name="vpc-id", values=[vpc_id])],
            opts=opts,
        )
        ami = aws.ec2.get_ami_output(
            most_recent=True,
            owners=[AMI_OWNER],
            filters=[aws.ec2.GetAmiFilterArgs(name="name", values=[AMI_NAME_PATTERN])],
            opts=opts,
        )
        return cls(
            subnet_ids=subnets.apply(lambda result: list(result.ids or [])),
            ami_id=ami.apply(lambda result: result.id),
        )
