"""
Pure helpers for naming, encoding and derived values. Testable without Pulumi runtime.

Used by the endpoint component (endpoint_service_name), the identity component
(assume_role_policy), the fleet component (encode_user_data, asg_tags,
first_subnet) and the ingress component (first_validation_option). No Pulumi
types; all functions accept and return plain Python types so they can be
unit-tested without a Pulumi stack.
"""

import base64
import json
from typing import Mapping, Sequence, TypeVar

T = TypeVar("T")


class DerivationError(RuntimeError):
    """Raised when a value derived from a resolved output is empty or unusable."""


def endpoint_service_name(
    region: str,
    service: str,
) -> str:
    """
    Return the VPC endpoint service name for an AWS service in a region.

    Example: ("eu-west-1", "ssm") -> "com.amazonaws.eu-west-1.ssm".
    """
    return f"com.amazonaws.{region}.{service}"


def assume_role_policy(
    service: str,
) -> str:
    """
    Return a JSON trust policy that lets only ``service`` assume the role.

    Args:
        service: Service principal (e.g. "ec2.amazonaws.com").

    Returns:
        Policy document serialized as a JSON string, as IAM expects.
    """
    return json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"Service": service},
                    "Action": "sts:AssumeRole",
                }
            ],
        }
    )


def encode_user_data(
    script: str,
) -> str:
    """Base64-encode a boot script; launch templates require encoded user data."""
    return base64.b64encode(script.encode("utf-8")).decode("ascii")


def asg_tags(
    tags: Mapping[str, str],
) -> list[dict]:
    """
    Convert a tag mapping into auto scaling group tag entries.

    Each entry propagates to instances at launch, so the fleet carries the same
    tags as the rest of the stack. Order follows the mapping.
    """
    return [
        {"key": key, "value": value, "propagate_at_launch": True}
        for key, value in tags.items()
    ]


def first_subnet(
    subnet_ids: Sequence[str],
) -> str:
    """Return the first subnet id; the launch template network interface is pinned to it."""
    if not subnet_ids:
        raise DerivationError("No subnets found in the VPC")
    return subnet_ids[0]


def first_validation_option(
    options: Sequence[T] | None,
) -> T:
    """
    Return the first ACM domain validation option.

    ACM reports one option per domain; the stack requests a single domain.

    Raises:
        DerivationError: If ACM returned no validation options.
    """
    if not options:
        raise DerivationError("No domain validation options available")
    return options[0]
