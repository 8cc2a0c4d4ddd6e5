"""
Web fleet infrastructure components.

Each concern is encapsulated in its own ComponentResource for clear ownership,
testability, and reuse. ``WebserverStack`` wires them together and is what the
Pulumi entrypoint (__main__.py) instantiates:

- **SecurityBoundaries**: load balancer and instance security groups.
- **SsmEndpoints**: ssm/ec2messages/ssmmessages interface endpoints.
- **InstanceIdentity**: EC2 role with SSM core policy + instance profile.
- **WebserverFleet**: launch template + auto scaling group.
- **LoadBalancedIngress**: ALB, target group, DNS/TLS or plain HTTP listeners,
  auto scaling group attachment.
"""

from components.endpoints import SsmEndpoints
from components.fleet import WebserverFleet
from components.identity import InstanceIdentity
from components.ingress import DnsDisabledPath, DnsEnabledPath, LoadBalancedIngress
from components.lookups import EnvironmentLookups
from components.security import SecurityBoundaries
from components.webserver import WebserverStack

__all__ = [
    "DnsDisabledPath",
    "DnsEnabledPath",
    "EnvironmentLookups",
    "InstanceIdentity",
    "LoadBalancedIngress",
    "SecurityBoundaries",
    "SsmEndpoints",
    "WebserverFleet",
    "WebserverStack",
]
