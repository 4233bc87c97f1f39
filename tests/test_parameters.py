"""
Tests for parameter records

Tests defaults and field-tagged validation of the validator and provider parameters.
"""
import dataclasses

import pytest

from policy_validation import PayloadValidatorParameters, PolicyValidatorParameters, ProviderParameters


class TestPolicyValidatorParameters:
    """Test PolicyValidatorParameters validation."""

    def test_defaults_are_valid(self):
        """Test that the default parameters validate."""
        params = PolicyValidatorParameters()
        assert params.validate().is_valid
        assert params.name == "defaultValidator"
        assert params.implementation == "default"
        assert params.nexus_name == "nexus"
        assert params.nexus_port == "8081"

    @pytest.mark.parametrize("field_name", ["implementation", "name", "nexus_name", "nexus_port"])
    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_field_is_invalid(self, field_name, blank):
        """Test that each required field rejects blank values with a tagged message."""
        params = dataclasses.replace(PolicyValidatorParameters(), **{field_name: blank})
        result = params.validate()

        assert not result.is_valid
        assert (field_name, f"{field_name} must be specified") in result.errors
        assert f"{field_name} must be specified" in result.result()

    def test_restored_field_is_valid_again(self):
        """Test that setting a field back to a value makes the parameters valid."""
        params = dataclasses.replace(PolicyValidatorParameters(), implementation=None)
        assert not params.validate().is_valid

        params = dataclasses.replace(params, implementation="An Implementation")
        assert params.validate().is_valid

    def test_non_positive_timeout_is_invalid(self):
        """Test that the nexus timeout must be positive."""
        params = PolicyValidatorParameters(nexus_timeout_seconds=0)
        result = params.validate()
        assert not result.is_valid
        assert result.errors[0][0] == "nexus_timeout_seconds"

    def test_parameters_are_immutable(self):
        """Test that parameters cannot be changed after construction."""
        params = PolicyValidatorParameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.nexus_port = "9999"

    def test_valid_result_summary_is_empty(self):
        """Test that a valid result has an empty summary."""
        assert PolicyValidatorParameters().validate().result() == ""


class TestPayloadValidatorParameters:
    """Test PayloadValidatorParameters validation."""

    def test_defaults_are_valid(self):
        """Test that the default payload parameters validate."""
        assert PayloadValidatorParameters().validate().is_valid

    def test_blank_implementation_is_invalid(self):
        """Test that a blank implementation fails validation."""
        result = PayloadValidatorParameters(implementation="").validate()
        assert not result.is_valid
        assert result.errors == [("implementation", "implementation must be specified")]


class TestProviderParameters:
    """Test ProviderParameters."""

    def test_from_dict_splits_retry_settings_and_extra(self):
        """Test that retry settings are read and the rest is kept as extra."""
        params = ProviderParameters.from_dict({
            "retry_period_seconds": 5,
            "retry_search_string": "refused",
            "url": "jdbc:mariadb://mariadb:3306/policyadmin",
        })

        assert params.retry_period_seconds == 5
        assert params.retry_search_string == "refused"
        assert params.extra == {"url": "jdbc:mariadb://mariadb:3306/policyadmin"}

    def test_from_dict_defaults(self):
        """Test defaults when nothing is configured."""
        params = ProviderParameters.from_dict(None)
        assert params.retry_period_seconds == 30
        assert params.retry_search_string == "Connection refused"
        assert params.validate().is_valid

    def test_negative_retry_period_is_invalid(self):
        """Test that a negative retry period fails validation."""
        assert not ProviderParameters(retry_period_seconds=-1).validate().is_valid
