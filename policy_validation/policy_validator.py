"""PolicyValidator interface and the factory that resolves its implementations."""

from abc import ABC, abstractmethod

from .models import PolicySet
from .plugin_factory import NamedPluginFactory


class PolicyValidator(ABC):
    """
    Validation operations over a policy set.

    Every operation returns None on success and raises PolicyModelError on
    failure. Implementations are constructed with a PolicyValidatorParameters
    instance as their only argument.
    """

    @abstractmethod
    def validate_policies_against_policy_types(self, policies: PolicySet) -> None:
        """Validate policy property values against their policy type definitions."""

    @abstractmethod
    def validate_native_policies(self, policies: PolicySet) -> None:
        """Validate the TOSCA compliant native policies in the set."""

    @abstractmethod
    def validate_drools_policies(self, drools_policies: PolicySet) -> None:
        """Check that the rule artifacts required by native Drools policies exist."""

    @abstractmethod
    def validate_xacml_policies(self, xacml_policies: PolicySet) -> None:
        """Validate native XACML policies."""

    @abstractmethod
    def validate_apex_policies(self, apex_policies: PolicySet) -> None:
        """Validate native APEX policies."""


class PolicyValidatorFactory(NamedPluginFactory[PolicyValidator]):
    """Creates PolicyValidator implementations named in PolicyValidatorParameters."""

    def __init__(self):
        super().__init__(PolicyValidator, "PolicyValidator")

        # Import here to avoid a cycle: the default implementation subclasses PolicyValidator
        from .default_policy_validator import DefaultPolicyValidator

        self.register_class(DefaultPolicyValidator, "default")
