"""
PayloadValidator interface, its default implementation and its factory.

Payload validation checks individual policies against their policy type and
native policy dependencies. No rules are defined yet: the default
implementation passes every payload through with the incoming result
unchanged, so the interface can be wired up and replaced by configuration.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from .models import Policy, ValidationOutcome
from .parameters import PayloadValidatorParameters
from .plugin_factory import NamedPluginFactory

logger = logging.getLogger(__name__)


class PayloadValidator(ABC):
    """Per-policy validation operations; each returns the updated result."""

    @abstractmethod
    def validate_policy_against_policy_type(
        self, result: ValidationOutcome, policy: Policy, policy_type: Mapping[str, Any]
    ) -> ValidationOutcome:
        """Validate policy property values against the policy type's property definitions."""

    @abstractmethod
    def validate_drools_policy_dependency(
        self, result: ValidationOutcome, drools_policy: Policy
    ) -> ValidationOutcome:
        """Validate the rule artifact dependency of a native Drools policy."""

    @abstractmethod
    def validate_xacml_policy(self, result: ValidationOutcome, xacml_policy: Policy) -> ValidationOutcome:
        """Validate the native XACML rules encoded in a policy."""

    @abstractmethod
    def validate_apex_policy(self, result: ValidationOutcome, apex_policy: Policy) -> ValidationOutcome:
        """Validate a native APEX policy."""


class DefaultPayloadValidator(PayloadValidator):
    """Placeholder implementation: every check returns the incoming result."""

    def __init__(self, parameters: PayloadValidatorParameters):
        if parameters is None:
            raise ValueError("parameters is marked non-null but is None")
        self.parameters = parameters
        logger.info("Payload validator initialized", extra={"validator_name": parameters.name})

    def validate_policy_against_policy_type(self, result, policy, policy_type):
        return result

    def validate_drools_policy_dependency(self, result, drools_policy):
        return result

    def validate_xacml_policy(self, result, xacml_policy):
        return result

    def validate_apex_policy(self, result, apex_policy):
        return result


class PayloadValidatorFactory(NamedPluginFactory[PayloadValidator]):
    """Creates PayloadValidator implementations named in PayloadValidatorParameters."""

    def __init__(self):
        super().__init__(PayloadValidator, "PayloadValidator")
        self.register_class(DefaultPayloadValidator, "default")
