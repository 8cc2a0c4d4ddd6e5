"""
Application Load Balancer in front of the fleet, with optional DNS and TLS.

The component creates the ALB and an HTTP target group, then takes exactly one
of two listener paths depending on ``create_dns_record``:

- ``DnsEnabledPath``: ACM certificate validated through Route 53, an alias
  ``A`` record for ``dns_name``, an HTTPS listener forwarding to the target
  group and an HTTP listener redirecting to HTTPS (301).
- ``DnsDisabledPath``: one HTTP listener forwarding to the target group.

Last, the auto scaling group is attached to the target group. ``dns_record_fqdn``
is ``None`` on the disabled path so stack exports can report the record as absent.
"""

from dataclasses import dataclass
from typing import Mapping, Sequence

import pulumi
import pulumi_aws as aws

from components._helpers import first_validation_option

ID: str = "webfleet:aws:LoadBalancedIngress"

VALIDATION_RECORD_TTL = 60


@dataclass(frozen=True)
class DnsEnabledPath:
    certificate: aws.acm.Certificate
    dns_record: aws.route53.Record
    validation_record: aws.route53.Record
    certificate_validation: aws.acm.CertificateValidation
    https_listener: aws.lb.Listener
    redirect_listener: aws.lb.Listener


@dataclass(frozen=True)
class DnsDisabledPath:
    http_listener: aws.lb.Listener


ListenerPath = DnsEnabledPath | DnsDisabledPath


def _forward_to(target_group: aws.lb.TargetGroup) -> list[aws.lb.ListenerDefaultActionArgs]:
    return [
        aws.lb.ListenerDefaultActionArgs(
            type="forward",
            target_group_arn=target_group.arn,
        )
    ]


class LoadBalancedIngress(pulumi.ComponentResource):
    """
    ALB, target group, listener path and auto scaling group attachment.

    Resources: LoadBalancer, TargetGroup, the listener path (see module
    docstring) and an autoscaling Attachment.
    """

    def __init__(
        self,
        name: str,
        vpc_id: pulumi.Input[str],
        subnet_ids: pulumi.Input[Sequence[str]],
        security_group_id: pulumi.Input[str],
        autoscaling_group_name: pulumi.Input[str],
        zone_id: str,
        create_dns_record: bool,
        dns_name: str,
        tags: Mapping[str, str],
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the load balancer, its listeners and the fleet attachment.

        Args:
            name: Pulumi resource name prefix.
            vpc_id: VPC of the target group.
            subnet_ids: Subnets for the load balancer (all resolved subnets).
            security_group_id: Load balancer security group.
            autoscaling_group_name: Group registered with the target group.
            zone_id: Route 53 hosted zone for the alias and validation records.
            create_dns_record: Selects DnsEnabledPath (True) or DnsDisabledPath.
            dns_name: Record and certificate domain; unused when disabled.
            tags: Tags for the load balancer, target group, certificate and
                listeners.
            opts: Options for the component.

        Outputs (set on self, registered for the component):
            load_balancer_dns: Public DNS name of the ALB.
            dns_record_fqdn: FQDN of the alias record, or None when disabled.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        self._name = name
        self._tags = dict(tags)
        self._child_opts = child_opts

        self.load_balancer = aws.lb.LoadBalancer(
            resource_name=f"{name}-lb",
            security_groups=[security_group_id],
            subnets=subnet_ids,
            tags=dict(tags),
            opts=child_opts,
        )
        self.target_group = aws.lb.TargetGroup(
            resource_name=f"{name}-tg",
            port=80,
            protocol="HTTP",
            vpc_id=vpc_id,
            tags=dict(tags),
            opts=child_opts,
        )

        self.listeners: ListenerPath
        if create_dns_record:
            self.listeners = self._dns_enabled_path(dns_name, zone_id)
        else:
            self.listeners = self._dns_disabled_path()

        aws.autoscaling.Attachment(
            resource_name=f"{name}-asg-attachment",
            autoscaling_group_name=autoscaling_group_name,
            lb_target_group_arn=self.target_group.arn,
            opts=child_opts,
        )

        self.load_balancer_dns: pulumi.Output[str] = self.load_balancer.dns_name
        self.dns_record_fqdn: pulumi.Output[str] | None = (
            self.listeners.dns_record.fqdn
            if isinstance(self.listeners, DnsEnabledPath)
            else None
        )
        self.register_outputs(
            {
                "load_balancer_dns": self.load_balancer_dns,
                "dns_record_fqdn": self.dns_record_fqdn,
            }
        )

    def _dns_enabled_path(self, dns_name: str, zone_id: str) -> DnsEnabledPath:
        name, opts = self._name, self._child_opts

        certificate = aws.acm.Certificate(
            resource_name=f"{name}-certificate",
            domain_name=dns_name,
            validation_method="DNS",
            tags=self._tags,
            opts=opts,
        )
        dns_record = aws.route53.Record(
            resource_name=f"{name}-dns",
            name=dns_name,
            type="A",
            zone_id=zone_id,
            aliases=[
                aws.route53.RecordAliasArgs(
                    name=self.load_balancer.dns_name,
                    zone_id=self.load_balancer.zone_id,
                    evaluate_target_health=True,
                )
            ],
            opts=opts,
        )

        # Fails the run when ACM returns no options; nothing below can register.
        option = certificate.domain_validation_options.apply(first_validation_option)
        validation_record = aws.route53.Record(
            resource_name=f"{name}-certificate-validation-record",
            name=option.apply(lambda o: o.resource_record_name),
            type=option.apply(lambda o: o.resource_record_type),
            zone_id=zone_id,
            records=[option.apply(lambda o: o.resource_record_value)],
            ttl=VALIDATION_RECORD_TTL,
            opts=opts,
        )
        certificate_validation = aws.acm.CertificateValidation(
            resource_name=f"{name}-certificate-validation",
            certificate_arn=certificate.arn,
            validation_record_fqdns=[validation_record.fqdn],
            opts=opts,
        )

        https_listener = aws.lb.Listener(
            resource_name=f"{name}-https-listener",
            load_balancer_arn=self.load_balancer.arn,
            port=443,
            protocol="HTTPS",
            certificate_arn=certificate_validation.certificate_arn,
            default_actions=_forward_to(self.target_group),
            tags=self._tags,
            opts=opts,
        )
        redirect_listener = aws.lb.Listener(
            resource_name=f"{name}-http-redirect-listener",
            load_balancer_arn=self.load_balancer.arn,
            port=80,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="redirect",
                    redirect=aws.lb.ListenerDefaultActionRedirectArgs(
                        protocol="HTTPS",
                        port="443",
                        status_code="HTTP_301",
                    ),
                )
            ],
            tags=self._tags,
            opts=opts,
        )
        return DnsEnabledPath(
            certificate=certificate,
            dns_record=dns_record,
            validation_record=validation_record,
            certificate_validation=certificate_validation,
            https_listener=https_listener,
            redirect_listener=redirect_listener,
        )

    def _dns_disabled_path(self) -> DnsDisabledPath:
        http_listener = aws.lb.Listener(
            resource_name=f"{self._name}-http-listener",
            load_balancer_arn=self.load_balancer.arn,
            port=80,
            protocol="HTTP",
            default_actions=_forward_to(self.target_group),
            tags=self._tags,
            opts=self._child_opts,
        )
        return DnsDisabledPath(http_listener=http_listener)
