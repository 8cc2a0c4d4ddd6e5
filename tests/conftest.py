"""Pulumi mocks that record every registered resource and invoke."""

import pulumi
import pytest

SUBNET_IDS = ["subnet-a", "subnet-b", "subnet-c"]
AMI_ID = "ami-0123456789abcdef0"


class RecordingMocks(pulumi.runtime.Mocks):
    def __init__(self):
        self.resources: list[pulumi.runtime.MockResourceArgs] = []
        self.calls: list[pulumi.runtime.MockCallArgs] = []
        self.validation_options_available = True
        self.subnet_ids = list(SUBNET_IDS)

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources.append(args)
        outputs = dict(args.inputs)
        outputs.setdefault("arn", f"arn:aws:mock:::{args.name}")
        outputs.setdefault("name", args.name)
        if args.typ == "aws:lb/loadBalancer:LoadBalancer":
            outputs["dnsName"] = f"{args.name}.eu-west-1.elb.amazonaws.com"
            outputs["zoneId"] = "Z32O12XQLNTSW2"
        elif args.typ == "aws:acm/certificate:Certificate":
            outputs["domainValidationOptions"] = (
                [
                    {
                        "domainName": args.inputs["domainName"],
                        "resourceRecordName": f"_abc.{args.inputs['domainName']}.",
                        "resourceRecordType": "CNAME",
                        "resourceRecordValue": "_xyz.acm-validations.aws.",
                    }
                ]
                if self.validation_options_available
                else []
            )
        elif args.typ == "aws:route53/record:Record":
            outputs["fqdn"] = args.inputs["name"]
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        self.calls.append(args)
        if args.token == "aws:ec2/getSubnets:getSubnets":
            return {"id": "eu-west-1", "ids": self.subnet_ids}
        if args.token == "aws:ec2/getAmi:getAmi":
            return {"id": AMI_ID, "imageId": AMI_ID}
        return {}

    def declared(self, typ: str) -> list[pulumi.runtime.MockResourceArgs]:
        return [r for r in self.resources if r.typ == typ]

    def named(self, name: str) -> pulumi.runtime.MockResourceArgs:
        (resource,) = [r for r in self.resources if r.name == name]
        return resource


@pytest.fixture
def mocks() -> RecordingMocks:
    recording = RecordingMocks()
    pulumi.runtime.set_mocks(recording, project="webfleet-aws", stack="test", preview=False)
    return recording
