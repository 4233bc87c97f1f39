"""Configuration loading: YAML document to validated parameter records."""

import logging
import os
import time
import urllib.parse
from importlib.resources import files
from typing import Any, Dict, Optional

import jsonschema
import yaml

from .exceptions import ConfigurationError
from .parameters import (
    PayloadValidatorParameters,
    PolicyValidatorParameters,
    ProviderParameters,
)

logger = logging.getLogger(__name__)

_NULLABLE_STRING = {"type": ["string", "null"]}

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "policy_validator": {
            "type": "object",
            "properties": {
                "name": _NULLABLE_STRING,
                "implementation": _NULLABLE_STRING,
                "nexus_name": _NULLABLE_STRING,
                "nexus_port": {"type": ["string", "integer", "null"]},
                "nexus_timeout_seconds": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
        "payload_validator": {
            "type": "object",
            "properties": {
                "name": _NULLABLE_STRING,
                "implementation": _NULLABLE_STRING,
            },
            "additionalProperties": False,
        },
        "database_provider": {
            "type": "object",
            "properties": {
                "retry_period_seconds": {"type": "number", "minimum": 0},
                "retry_search_string": {"type": "string"},
            },
        },
    },
}


class ConfigLoader:
    """
    Loads the validator and database provider configuration.

    The bundled local-config.yaml is used unless a path or file:// URI is
    given. Sections that are absent fall back to the parameter defaults.
    """

    def __init__(self, config_uri: Optional[str] = None):
        """
        Load and validate configuration.

        Args:
            config_uri: Path or file:// URI of a YAML config; bundled
                local-config.yaml when None

        Raises:
            ConfigurationError: If the file cannot be read, does not match the
                config schema, or leaves a required field blank
        """
        if config_uri is None:
            config_file = files("policy_validation").joinpath("local-config.yaml")
            self.config_path = str(config_file)
            with config_file.open("r") as f:
                self.config = yaml.safe_load(f) or {}
        else:
            self.config_path = self._resolve_path(config_uri)
            self.config = self._load_yaml(self.config_path)
        self.loaded_at = time.time()

        try:
            jsonschema.validate(self.config, CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            location = ".".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigurationError(f"invalid configuration at {location}: {e.message}") from e

        self.policy_validator_parameters = PolicyValidatorParameters(
            **self._section("policy_validator", stringify=("nexus_port",))
        )
        self.payload_validator_parameters = PayloadValidatorParameters(
            **self._section("payload_validator")
        )
        self.provider_parameters = ProviderParameters.from_dict(self._section("database_provider"))

        for params in (
            self.policy_validator_parameters,
            self.payload_validator_parameters,
            self.provider_parameters,
        ):
            result = params.validate()
            if not result.is_valid:
                raise ConfigurationError(result.result(), validation_result=result)

        logger.info("Configuration loaded", extra={"config_path": self.config_path})

    @staticmethod
    def _resolve_path(uri: str) -> str:
        parsed = urllib.parse.urlparse(uri)
        if parsed.scheme == "file":
            return urllib.parse.unquote(parsed.path)
        if not parsed.scheme or len(parsed.scheme) == 1:
            # No scheme, or a Windows drive letter
            return os.path.abspath(uri)
        raise ConfigurationError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")

    @staticmethod
    def _load_yaml(path: str) -> Dict[str, Any]:
        """Load YAML file from disk."""
        try:
            with open(path) as f:
                return yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigurationError(f"Failed to read config from {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse config from {path}: {e}") from e

    def _section(self, name: str, stringify=()) -> Dict[str, Any]:
        section = dict(self.config.get(name) or {})
        for key in stringify:
            if section.get(key) is not None:
                section[key] = str(section[key])
        return section

    def get_policy_validator_parameters(self) -> PolicyValidatorParameters:
        return self.policy_validator_parameters

    def get_payload_validator_parameters(self) -> PayloadValidatorParameters:
        return self.payload_validator_parameters

    def get_provider_parameters(self) -> ProviderParameters:
        return self.provider_parameters

    def get_config_age(self) -> float:
        """Return seconds since the configuration was loaded."""
        return time.time() - self.loaded_at
