"""Tests for pure helpers"""

import base64
import json

import pytest

from components import _helpers


class TestEndpointServiceName:
    def test_builds_regional_name(self):
        assert _helpers.endpoint_service_name("eu-west-1", "ssm") == "com.amazonaws.eu-west-1.ssm"

    def test_ssmmessages(self):
        assert (
            _helpers.endpoint_service_name("us-east-2", "ssmmessages")
            == "com.amazonaws.us-east-2.ssmmessages"
        )


class TestAssumeRolePolicy:
    def test_trusts_only_given_service(self):
        policy = json.loads(_helpers.assume_role_policy("ec2.amazonaws.com"))
        assert policy["Version"] == "2012-10-17"
        (statement,) = policy["Statement"]
        assert statement == {
            "Effect": "Allow",
            "Principal": {"Service": "ec2.amazonaws.com"},
            "Action": "sts:AssumeRole",
        }


class TestEncodeUserData:
    def test_base64_round_trips_script(self):
        script = "#!/bin/bash\necho hi\n"
        encoded = _helpers.encode_user_data(script)
        assert base64.b64decode(encoded).decode("utf-8") == script

    def test_output_is_ascii(self):
        assert _helpers.encode_user_data("echo é").isascii()


class TestAsgTags:
    def test_every_tag_propagates_at_launch(self):
        tags = {"project": "web", "owner": "ops"}
        assert _helpers.asg_tags(tags) == [
            {"key": "project", "value": "web", "propagate_at_launch": True},
            {"key": "owner", "value": "ops", "propagate_at_launch": True},
        ]

    def test_empty_tags(self):
        assert _helpers.asg_tags({}) == []


class TestFirstSubnet:
    def test_returns_first(self):
        assert _helpers.first_subnet(["subnet-a", "subnet-b"]) == "subnet-a"

    def test_empty_raises(self):
        with pytest.raises(_helpers.DerivationError):
            _helpers.first_subnet([])


class TestFirstValidationOption:
    def test_returns_first(self):
        assert _helpers.first_validation_option(["a", "b"]) == "a"

    def test_empty_raises(self):
        with pytest.raises(_helpers.DerivationError, match="No domain validation options"):
            _helpers.first_validation_option([])

    def test_none_raises(self):
        with pytest.raises(_helpers.DerivationError):
            _helpers.first_validation_option(None)
