"""
Stack configuration and deployment inputs.

``StackConfig`` is a typed, immutable view of the stack settings. Every setting
has a built-in default and may be overridden from Pulumi config (e.g.
Pulumi.<stack>.yaml or pulumi config set). ``EnvironmentInputs`` carries the two
identifiers that must come from the process environment (``VPC_ID`` and
``ROUTE53_ZONE_ID``). Both are built once by __main__.main() before any
resource is declared; any problem raises ``ConfigurationError``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

import pulumi

VPC_ID_VAR = "VPC_ID"
ZONE_ID_VAR = "ROUTE53_ZONE_ID"


class ConfigurationError(ValueError):
    """Raised when stack settings or environment inputs are missing or invalid."""


def _get_bool(config: pulumi.Config, key: str) -> bool | None:
    raw = config.get(key)
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in ("1", "true", "yes"):
        return True
    if value in ("0", "false", "no"):
        return False
    raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")


def _get_int(config: pulumi.Config, key: str) -> int | None:
    raw = config.get(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from e


def _get_str(config: pulumi.Config, key: str) -> str | None:
    return config.get(key)


def _get_tags(config: pulumi.Config, key: str) -> dict[str, str] | None:
    raw = config.get_object(key)
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{key} must be a mapping of tag names to values")
    return {str(k): str(v) for k, v in raw.items()}


# (key, parser); parser receives (config, key) and returns the value or None.
_CONFIG_SPEC: list[tuple[str, Callable[[pulumi.Config, str], Any]]] = [
    ("aws_region", _get_str),
    ("instance_type", _get_str),
    ("min_size", _get_int),
    ("max_size", _get_int),
    ("desired_capacity", _get_int),
    ("default_tags", _get_tags),
    ("create_dns_record", _get_bool),
    ("dns_name", _get_str),
]

DEFAULT_TAGS: dict[str, str] = {
    "project": "pulumi-aws-ec2-asg",
    "owner": "platform",
    "Name": "pulumi-aws-ec2-asg",
}


@dataclass(frozen=True)
class StackConfig:
    """
    Stack configuration, defaults overridable from Pulumi config.

    Attributes:
        aws_region: Region for the explicit AWS provider and endpoint service names.
        instance_type: EC2 instance type for the launch template.
        min_size: Auto scaling group minimum size.
        max_size: Auto scaling group maximum size.
        desired_capacity: Auto scaling group desired capacity.
        default_tags: Tags applied to every taggable resource and propagated
            to fleet instances at launch.
        create_dns_record: If True, provision the ACM certificate, Route 53
            records and the HTTPS listener; otherwise serve plain HTTP.
        dns_name: FQDN for the alias record and certificate. Must exist in the
            zone identified by ROUTE53_ZONE_ID when create_dns_record is True.
    """

    aws_region: str = "eu-west-1"
    instance_type: str = "t2.micro"
    min_size: int = 1
    max_size: int = 3
    desired_capacity: int = 1
    default_tags: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TAGS))
    create_dns_record: bool = True
    dns_name: str = "ec2-asg.example.com"

    def __post_init__(self):
        if not 0 <= self.min_size <= self.desired_capacity <= self.max_size:
            raise ConfigurationError(
                "scaling bounds must satisfy 0 <= min_size <= desired_capacity <= max_size "
                f"(got min_size={self.min_size}, desired_capacity={self.desired_capacity}, "
                f"max_size={self.max_size})"
            )
        if self.create_dns_record and not self.dns_name:
            raise ConfigurationError("dns_name is required when create_dns_record is true")

    @classmethod
    def from_pulumi_config(cls, config: pulumi.Config) -> "StackConfig":
        """
        Build StackConfig from pulumi.Config(). Keys in _CONFIG_SPEC that are
        not set keep their default.
        """
        kwargs = {}
        for key, parser in _CONFIG_SPEC:
            value = parser(config, key)
            if value is not None:
                kwargs[key] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class EnvironmentInputs:
    """
    Identifiers supplied by the deployment environment.

    Attributes:
        vpc_id: Existing VPC that hosts the fleet (VPC_ID).
        route53_zone_id: Hosted zone for the alias and validation records
            (ROUTE53_ZONE_ID).
    """

    vpc_id: str
    route53_zone_id: str

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "EnvironmentInputs":
        """Read both identifiers; raise ConfigurationError naming every one missing."""
        values = {name: (environ.get(name) or "").strip() for name in (VPC_ID_VAR, ZONE_ID_VAR)}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ConfigurationError(
                f"{', '.join(missing)} environment variable(s) required"
            )
        return cls(vpc_id=values[VPC_ID_VAR], route53_zone_id=values[ZONE_ID_VAR])
