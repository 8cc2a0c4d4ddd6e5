"""
Web fleet - Pulumi entrypoint.

Declares a load-balanced, auto scaling EC2 fleet in an existing VPC:

- **Inputs**: ``VPC_ID`` and ``ROUTE53_ZONE_ID`` from the environment (both
  required); stack settings from Pulumi config with built-in defaults.
- **Provider**: an explicit AWS provider pinned to ``aws_region``.
- **Stack**: ``WebserverStack`` (security groups, SSM endpoints, IAM, launch
  template + auto scaling group, ALB with HTTPS + redirect or plain HTTP).

Stack exports: loadBalancerDns, dnsRecord (None without DNS), ssmEndpointId,
ec2MessagesEndpointId, ssmmessagesEndpointId.
"""

import os

import pulumi
import pulumi_aws as aws

from components import WebserverStack
from config import ConfigurationError, EnvironmentInputs, StackConfig


def main():
    """
    Build the web fleet stack and export its outputs.

    Configuration and environment inputs are resolved first so a missing or
    invalid value stops the run before any resource is declared.
    """
    try:
        environment = EnvironmentInputs.from_environ(os.environ)
        config = StackConfig.from_pulumi_config(pulumi.Config())
    except ConfigurationError as e:
        pulumi.log.error(f"Invalid configuration: {e}")
        raise

    pulumi.log.info(
        "Listener path: "
        + (f"HTTPS for {config.dns_name}" if config.create_dns_record else "HTTP only")
    )

    provider = aws.Provider("aws", region=config.aws_region)
    stack = WebserverStack(
        name="webserver",
        config=config,
        environment=environment,
        opts=pulumi.ResourceOptions(providers=[provider]),
    )

    for output_name, value in stack.exports.items():
        pulumi.export(output_name, value)


if __name__ == "__main__":
    main()
