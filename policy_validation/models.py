"""
Policy data model consumed by the validators.

A policy set maps a (name, version) key to a policy. Policies carry the
declared policy type and a free-form property bag; native Drools policies
reference their rule bundle through the "rule_artifact" property.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional

from .exceptions import ArtifactCoordinateError, PolicyModelError

PROPERTY_RULE_ARTIFACT = "rule_artifact"
GROUP_ID = "groupId"
ARTIFACT_ID = "artifactId"
VERSION = "version"

DEFAULT_POLICY_VERSION = "1.0.0"


class NativePolicyType(str, Enum):
    """Native policy types, identified by their TOSCA policy type name."""

    DROOLS = "onap.policies.native.Drools"
    XACML = "onap.policies.native.Xacml"
    APEX = "onap.policies.native.Apex"


@dataclass(frozen=True)
class PolicyEntityKey:
    """Identity of a policy within a policy set."""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}:{self.version}"


@dataclass
class Policy:
    """A TOSCA policy: declared type plus its property bag."""

    name: str
    type: str
    version: str = DEFAULT_POLICY_VERSION
    type_version: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> PolicyEntityKey:
        return PolicyEntityKey(self.name, self.version)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "Policy":
        """Build a policy from its TOSCA dict form (the value under its name)."""
        return cls(
            name=data.get("name", name),
            type=data.get("type", ""),
            version=str(data.get("version") or DEFAULT_POLICY_VERSION),
            type_version=data.get("type_version"),
            properties=dict(data.get("properties") or {}),
        )


PolicySet = Mapping[PolicyEntityKey, Policy]


def policy_set_from_service_template(template: Mapping[str, Any]) -> Dict[PolicyEntityKey, Policy]:
    """
    Build a policy set from a TOSCA service template.

    The template lists its policies under topology_template.policies as a
    list of single-entry maps ({policy_name: policy_body}). When the same
    (name, version) appears twice, the first occurrence is kept.

    Args:
        template: Parsed service template (from JSON or YAML)

    Returns:
        Dict mapping PolicyEntityKey to Policy, in template order
    """
    if not isinstance(template, Mapping):
        raise _malformed(f"service template must be an object, got {type(template).__name__}")
    topology = template.get("topology_template") or {}
    if not isinstance(topology, Mapping):
        raise _malformed(f"topology_template must be an object, got {type(topology).__name__}")
    entries = topology.get("policies") or []
    if not isinstance(entries, list):
        raise _malformed(f"topology_template.policies must be a list, got {type(entries).__name__}")

    policies: Dict[PolicyEntityKey, Policy] = {}
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise _malformed(f"policies[{index}] must be an object, got {type(entry).__name__}")
        for name, body in entry.items():
            body = body or {}
            if not isinstance(body, Mapping):
                raise _malformed(f'policy "{name}" must be an object, got {type(body).__name__}')
            properties = body.get("properties") or {}
            if not isinstance(properties, Mapping):
                raise _malformed(f'properties of policy "{name}" must be an object')
            policy = Policy.from_dict(name, body)
            policies.setdefault(policy.key, policy)
    return policies


def _malformed(message: str) -> PolicyModelError:
    return PolicyModelError(HTTPStatus.BAD_REQUEST, f"malformed service template: {message}")


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Maven coordinate (group, artifact, version) of a rule bundle."""

    group_id: str
    artifact_id: str
    version: str

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "ArtifactCoordinate":
        """
        Decode the coordinate stored under the "rule_artifact" property.

        The property may be a mapping or a JSON string encoding one.

        Raises:
            ArtifactCoordinateError: If the property is absent, malformed or
                lacks any of groupId, artifactId, version
        """
        raw = properties.get(PROPERTY_RULE_ARTIFACT) if properties else None
        if raw is None:
            raise ArtifactCoordinateError(f"property '{PROPERTY_RULE_ARTIFACT}' is missing")

        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError as e:
                raise ArtifactCoordinateError(
                    f"property '{PROPERTY_RULE_ARTIFACT}' is not valid JSON: {e}"
                ) from e

        if not isinstance(raw, Mapping):
            raise ArtifactCoordinateError(
                f"property '{PROPERTY_RULE_ARTIFACT}' must be an object, got {type(raw).__name__}"
            )

        values = []
        for field_name in (GROUP_ID, ARTIFACT_ID, VERSION):
            value = raw.get(field_name)
            if not isinstance(value, str) or not value.strip():
                raise ArtifactCoordinateError(
                    f"field '{field_name}' of '{PROPERTY_RULE_ARTIFACT}' must be a non-blank string"
                )
            values.append(value)

        return cls(*values)

    def resolve_params(self, repository: str) -> Dict[str, str]:
        """Return the query parameters of a Nexus artifact resolve request."""
        return {"r": repository, "g": self.group_id, "a": self.artifact_id, "v": self.version}

    def __str__(self) -> str:
        return f"{self.group_id}|{self.artifact_id}|{self.version}"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a validation: success, or a failure with message and status code."""

    valid: bool = True
    message: str = ""
    status_code: Optional[int] = None

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls()

    @classmethod
    def failure(cls, message: str, status_code: int) -> "ValidationOutcome":
        return cls(valid=False, message=message, status_code=int(status_code))

    @classmethod
    def from_error(cls, error: PolicyModelError) -> "ValidationOutcome":
        return cls.failure(error.message, error.status_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "PASS" if self.valid else "FAIL",
            "message": self.message,
            "status_code": self.status_code,
        }
