"""
EC2 fleet: launch template + auto scaling group.

Instances boot Amazon Linux 2023 with the SSM agent and httpd serving a page
that names the host. The auto scaling group spans every resolved subnet, while
the launch template's single network interface is pinned to the first one; the
asymmetry is kept as-is and reported with a warning when more than one subnet
is resolved.
"""

from typing import Mapping, Sequence

import pulumi
import pulumi_aws as aws

from components._helpers import asg_tags, encode_user_data, first_subnet

ID: str = "webfleet:aws:WebserverFleet"

USER_DATA = """#!/bin/bash
dnf update -y
dnf install -y https://s3.amazonaws.com/ec2-downloads-windows/SSMAgent/latest/linux_amd64/amazon-ssm-agent.rpm
systemctl enable amazon-ssm-agent
systemctl start amazon-ssm-agent
dnf install -y httpd
systemctl start httpd
systemctl enable httpd
echo "<h1>Hello World from $(hostname -f)</h1>" > /var/www/html/index.html
"""

HEALTH_CHECK_TYPE = "EC2"
HEALTH_CHECK_GRACE_PERIOD = 300


def _primary_subnet(subnet_ids: Sequence[str]) -> str:
    subnet = first_subnet(subnet_ids)
    if len(subnet_ids) > 1:
        pulumi.log.warn(
            f"launch template network interface is pinned to {subnet}; "
            f"the auto scaling group spans {len(subnet_ids)} subnets"
        )
    return subnet


class WebserverFleet(pulumi.ComponentResource):
    """
    Launch template and auto scaling group for the web servers.

    Resources: LaunchTemplate (user data, instance profile, one network
    interface), Group (launch template $Latest, all subnets, tags propagated).
    """

    def __init__(
        self,
        name: str,
        instance_type: str,
        ami_id: pulumi.Input[str],
        subnet_ids: pulumi.Output[list[str]],
        security_group_id: pulumi.Input[str],
        instance_profile_name: pulumi.Input[str],
        min_size: int,
        max_size: int,
        desired_capacity: int,
        tags: Mapping[str, str],
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the launch template and the auto scaling group.

        Args:
            name: Pulumi resource name prefix.
            instance_type: EC2 instance type.
            ami_id: Image id, usually from the AMI lookup.
            subnet_ids: Resolved VPC subnets. The group uses all of them; the
                template's network interface uses the first.
            security_group_id: Instance security group.
            instance_profile_name: Profile granting the SSM role.
            min_size: Group minimum size.
            max_size: Group maximum size.
            desired_capacity: Group desired capacity.
            tags: Tags for the template and, propagated at launch, the instances.
            opts: Options for the component.

        Outputs (set on self, registered for the component):
            autoscaling_group_name: Used to attach the group to a target group.
            launch_template_id: Id of the launch template.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        network_interface = aws.ec2.LaunchTemplateNetworkInterfaceArgs(
            device_index=0,
            associate_public_ip_address="true",
            subnet_id=subnet_ids.apply(_primary_subnet),
            security_groups=[security_group_id],
        )
        self.launch_template = aws.ec2.LaunchTemplate(
            resource_name=f"{name}-launch-template",
            instance_type=instance_type,
            image_id=ami_id,
            user_data=encode_user_data(USER_DATA),
            iam_instance_profile=aws.ec2.LaunchTemplateIamInstanceProfileArgs(
                name=instance_profile_name,
            ),
            network_interfaces=[network_interface],
            tags=dict(tags),
            opts=child_opts,
        )

        self.autoscaling_group = aws.autoscaling.Group(
            resource_name=f"{name}-asg",
            vpc_zone_identifiers=subnet_ids,
            launch_template=aws.autoscaling.GroupLaunchTemplateArgs(
                id=self.launch_template.id,
                version="$Latest",
            ),
            min_size=min_size,
            max_size=max_size,
            desired_capacity=desired_capacity,
            health_check_type=HEALTH_CHECK_TYPE,
            health_check_grace_period=HEALTH_CHECK_GRACE_PERIOD,
            tags=[aws.autoscaling.GroupTagArgs(**tag) for tag in asg_tags(tags)],
            opts=child_opts,
        )

        self.autoscaling_group_name: pulumi.Output[str] = self.autoscaling_group.name
        self.launch_template_id: pulumi.Output[str] = self.launch_template.id
        self.register_outputs(
            {
                "autoscaling_group_name": self.autoscaling_group_name,
                "launch_template_id": self.launch_template_id,
            }
        )
