"""
Public API for policy-validation

This is the "front door": it loads the configuration, builds the configured
validators once, and exposes the validation and provider retrieval
operations the policy service calls.
"""

import logging
import threading
from typing import Any, Mapping, Optional

from .config_loader import ConfigLoader
from .exceptions import PolicyModelError
from .models import PolicySet, ValidationOutcome, policy_set_from_service_template
from .payload_validator import PayloadValidatorFactory
from .policy_validator import PolicyValidatorFactory
from .provider_retriever import ProviderRetriever

logger = logging.getLogger(__name__)


class PolicyValidationService:
    """
    Main policy validation service class.

    Validators are created during construction, before any concurrent use,
    and are only read afterwards.

    Example:
        from policy_validation import PolicyValidationService

        service = PolicyValidationService()
        outcome = service.validate_service_template(template)
        if not outcome.valid:
            print(outcome.status_code, outcome.message)
    """

    def __init__(self, config_uri: Optional[str] = None, config_loader: Optional[ConfigLoader] = None):
        """
        Initialize the service.

        Args:
            config_uri: Path or file:// URI of a YAML config (bundled config when None)
            config_loader: Pre-built ConfigLoader; takes precedence over config_uri

        Raises:
            ConfigurationError: If the configuration is invalid
            PolicyModelError: If a configured validator cannot be created
        """
        self.config_loader = config_loader or ConfigLoader(config_uri)

        self.policy_validator_factory = PolicyValidatorFactory()
        self.payload_validator_factory = PayloadValidatorFactory()

        self.policy_validator = self.policy_validator_factory.create(
            self.config_loader.get_policy_validator_parameters()
        )
        self.payload_validator = self.payload_validator_factory.create(
            self.config_loader.get_payload_validator_parameters()
        )
        self.provider_retriever = ProviderRetriever.from_parameters(
            self.config_loader.get_provider_parameters()
        )

    def validate_policy_set(self, policies: PolicySet) -> ValidationOutcome:
        """
        Validate a policy set: policy type checks, then native policy checks.

        Returns:
            ValidationOutcome; a failure carries the message and status code of
            the first error raised
        """
        try:
            self.policy_validator.validate_policies_against_policy_types(policies)
            self.policy_validator.validate_native_policies(policies)
        except PolicyModelError as e:
            logger.info(
                "Policy set rejected",
                extra={"status_code": e.status_code, "reason": e.message},
            )
            return ValidationOutcome.from_error(e)
        return ValidationOutcome.success()

    def validate_service_template(self, template: Mapping[str, Any]) -> ValidationOutcome:
        """
        Validate the policies of a TOSCA service template.

        Example:
            outcome = service.validate_service_template({
                "tosca_definitions_version": "tosca_simple_yaml_1_1_0",
                "topology_template": {"policies": [
                    {"example.drools": {
                        "type": "onap.policies.native.Drools",
                        "version": "1.0.0",
                        "properties": {"rule_artifact": {
                            "groupId": "org.onap.policy.native.drools",
                            "artifactId": "example-drools-policy",
                            "version": "1.0.0"}}}}
                ]}
            })
        """
        try:
            policies = policy_set_from_service_template(template)
        except PolicyModelError as e:
            logger.info("Service template rejected", extra={"status_code": e.status_code, "reason": e.message})
            return ValidationOutcome.from_error(e)
        return self.validate_policy_set(policies)

    def retrieve_provider(
        self,
        factory,
        params=None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Obtain a storage provider handle, retrying while the store is unreachable.

        Args:
            factory: Provider factory (create_provider(params) or a callable)
            params: Parameters for the factory; the configured ProviderParameters when None
            cancel_event: Event that interrupts the retry wait when set

        Returns:
            The provider handle
        """
        if params is None:
            params = self.config_loader.get_provider_parameters()
        return self.provider_retriever.retrieve(factory, params, cancel_event=cancel_event)
