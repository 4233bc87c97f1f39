"""
Tests for the policy data model

Tests service template parsing, artifact coordinate decoding and outcomes.
"""
from http import HTTPStatus

import pytest

from policy_validation import (
    ArtifactCoordinate,
    ArtifactCoordinateError,
    NativePolicyType,
    PolicyEntityKey,
    PolicyModelError,
    ValidationOutcome,
    policy_set_from_service_template,
)


@pytest.fixture
def service_template():
    """TOSCA service template with a native Drools policy and a duplicate key."""
    return {
        "tosca_definitions_version": "tosca_simple_yaml_1_1_0",
        "topology_template": {
            "policies": [
                {
                    "example.drools": {
                        "type": "onap.policies.native.Drools",
                        "type_version": "1.0.0",
                        "version": "1.0.0",
                        "properties": {
                            "rule_artifact": {
                                "groupId": "org.onap.policy.native.drools",
                                "artifactId": "example-valid-drools-policy",
                                "version": "1.0.0-SNAPSHOT",
                            }
                        },
                    }
                },
                {"example.drools": {"type": "some.other.Type", "version": "1.0.0"}},
                {"example.guard": {"type": "onap.policies.controlloop.guard.common.Blacklist"}},
            ]
        },
    }


class TestPolicySetFromServiceTemplate:
    """Test policy_set_from_service_template()."""

    def test_keys_and_types(self, service_template):
        """Test that each policy is keyed by name and version."""
        policies = policy_set_from_service_template(service_template)

        assert list(policies) == [
            PolicyEntityKey("example.drools", "1.0.0"),
            PolicyEntityKey("example.guard", "1.0.0"),
        ]

    def test_first_occurrence_wins(self, service_template):
        """Test that a repeated key keeps the first policy."""
        policies = policy_set_from_service_template(service_template)
        policy = policies[PolicyEntityKey("example.drools", "1.0.0")]

        assert policy.type == NativePolicyType.DROOLS.value
        assert policy.type_version == "1.0.0"

    def test_template_without_policies(self):
        """Test that a template without a topology gives an empty set."""
        assert policy_set_from_service_template({}) == {}

    @pytest.mark.parametrize("version", [None, ""])
    def test_missing_version_uses_default(self, version):
        """Test that a null or empty version falls back to the default version."""
        policies = policy_set_from_service_template(
            {"topology_template": {"policies": [{"p": {"type": "t", "version": version}}]}}
        )
        assert list(policies) == [PolicyEntityKey("p", "1.0.0")]

    def test_numeric_version_is_stringified(self):
        """Test that a YAML number version becomes a string key."""
        policies = policy_set_from_service_template(
            {"topology_template": {"policies": [{"p": {"type": "t", "version": 2}}]}}
        )
        assert list(policies) == [PolicyEntityKey("p", "2")]

    @pytest.mark.parametrize("template", [
        ["not", "a", "template"],
        {"topology_template": ["policies"]},
        {"topology_template": {"policies": {"p": {"type": "t"}}}},
        {"topology_template": {"policies": ["p"]}},
        {"topology_template": {"policies": [{"p": "onap.policies.native.Drools"}]}},
        {"topology_template": {"policies": [{"p": {"type": "t", "properties": ["x"]}}]}},
    ])
    def test_malformed_template(self, template):
        """Test that malformed templates are rejected as bad requests."""
        with pytest.raises(PolicyModelError) as exc_info:
            policy_set_from_service_template(template)

        assert exc_info.value.status == HTTPStatus.BAD_REQUEST
        assert exc_info.value.message.startswith("malformed service template")


class TestArtifactCoordinate:
    """Test ArtifactCoordinate.from_properties()."""

    def test_from_mapping(self):
        """Test decoding from a nested mapping."""
        coordinate = ArtifactCoordinate.from_properties(
            {"rule_artifact": {"groupId": "g", "artifactId": "a", "version": "1"}}
        )
        assert coordinate == ArtifactCoordinate("g", "a", "1")
        assert str(coordinate) == "g|a|1"

    def test_from_json_string(self):
        """Test decoding from a JSON encoded property."""
        coordinate = ArtifactCoordinate.from_properties(
            {"rule_artifact": '{"groupId": "g", "artifactId": "a", "version": "1"}'}
        )
        assert coordinate.artifact_id == "a"

    @pytest.mark.parametrize("properties", [
        None,
        {},
        {"rule_artifact": None},
        {"rule_artifact": 42},
        {"rule_artifact": {"groupId": "g", "artifactId": "a", "version": 1}},
    ])
    def test_invalid(self, properties):
        """Test that incomplete or malformed coordinates are rejected."""
        with pytest.raises(ArtifactCoordinateError):
            ArtifactCoordinate.from_properties(properties)


class TestValidationOutcome:
    """Test ValidationOutcome."""

    def test_success(self):
        """Test the success outcome."""
        outcome = ValidationOutcome.success()
        assert outcome.valid
        assert outcome.to_dict()["status"] == "PASS"

    def test_from_error(self):
        """Test conversion from a PolicyModelError."""
        outcome = ValidationOutcome.from_error(PolicyModelError(HTTPStatus.NOT_ACCEPTABLE, "nope"))
        assert not outcome.valid
        assert outcome.to_dict() == {"status": "FAIL", "message": "nope", "status_code": 406}
