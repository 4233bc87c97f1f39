"""
Default PolicyValidator implementation.

Native policies are validated per native policy type: the policy set is
filtered by type and each subset is handed to the matching check. Only the
Drools check does real work today; it makes sure the rule artifact named by
each Drools policy has been released to the Nexus repository.
"""

import logging
from http import HTTPStatus
from typing import Dict, Optional

import requests

from .exceptions import ArtifactCoordinateError, HttpClientConfigError, PolicyModelError
from .models import ArtifactCoordinate, NativePolicyType, Policy, PolicyEntityKey, PolicySet
from .nexus_client import NexusClient
from .parameters import PolicyValidatorParameters
from .policy_validator import PolicyValidator

logger = logging.getLogger(__name__)

RELEASE_REPOSITORY = "releases"
RESOLVE_PATH = "resolve"


class DefaultPolicyValidator(PolicyValidator):
    """Validates native policies; checks Drools rule artifacts against Nexus."""

    def __init__(self, parameters: PolicyValidatorParameters):
        """
        Args:
            parameters: Validator parameters; nexus_name/nexus_port locate the repository

        Raises:
            ValueError: If parameters is None
        """
        if parameters is None:
            raise ValueError("parameters is marked non-null but is None")
        self.parameters = parameters

        logger.info(
            "Policy validator initialized",
            extra={
                "validator_name": parameters.name,
                "nexus_name": parameters.nexus_name,
                "nexus_port": parameters.nexus_port,
            },
        )

    def validate_policies_against_policy_types(self, policies: PolicySet) -> None:
        # No policy type rules are defined yet
        return None

    def validate_native_policies(self, policies: PolicySet) -> None:
        self.validate_drools_policies(self.filter_native_policies(policies, NativePolicyType.DROOLS))
        self.validate_xacml_policies(self.filter_native_policies(policies, NativePolicyType.XACML))
        self.validate_apex_policies(self.filter_native_policies(policies, NativePolicyType.APEX))

    def validate_drools_policies(self, drools_policies: PolicySet) -> None:
        if not drools_policies:
            return

        client = self._create_client()
        try:
            for key, policy in drools_policies.items():
                logger.debug("Validating native drools policy", extra={"policy": str(key)})
                self.validate_drools_policy(policy, client)
        finally:
            client.close()

    def validate_drools_policy(self, drools_policy: Policy, client: Optional[NexusClient] = None) -> None:
        """
        Check that the rule artifact of one native Drools policy exists in Nexus.

        Args:
            drools_policy: Policy whose "rule_artifact" property names the artifact
            client: Nexus client to use; one is built from the parameters if omitted

        Raises:
            PolicyModelError: NOT_ACCEPTABLE if the coordinate cannot be decoded,
                the client cannot be built or the artifact is not found; the
                remote status and body for any other non-200 answer
        """
        try:
            coordinate = ArtifactCoordinate.from_properties(drools_policy.properties)
        except ArtifactCoordinateError as e:
            raise PolicyModelError(
                HTTPStatus.NOT_ACCEPTABLE,
                f"errors on extracting GAV information from native drools policy: {e}",
            ) from e

        if client is None:
            with self._create_client() as own_client:
                self._resolve_artifact(coordinate, own_client)
        else:
            self._resolve_artifact(coordinate, client)

    def _resolve_artifact(self, coordinate: ArtifactCoordinate, client: NexusClient) -> None:
        try:
            response = client.get(RESOLVE_PATH, params=coordinate.resolve_params(RELEASE_REPOSITORY))
        except requests.RequestException as e:
            raise PolicyModelError(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                f"errors on connecting to {client.host}:{client.port}: {e}",
            ) from e

        code = response.status_code
        if code == HTTPStatus.OK:
            logger.debug("Rule artifact found", extra={"artifact": str(coordinate)})
            return
        if code == HTTPStatus.NOT_FOUND:
            raise PolicyModelError(HTTPStatus.NOT_ACCEPTABLE, f"rule artifact {coordinate} not found")
        raise PolicyModelError(code, response.text)

    def validate_xacml_policies(self, xacml_policies: PolicySet) -> None:
        if not xacml_policies:
            return
        # No XACML rules are checked yet

    def validate_apex_policies(self, apex_policies: PolicySet) -> None:
        if not apex_policies:
            return
        # No APEX rules are checked yet

    @staticmethod
    def filter_native_policies(
        policies: PolicySet, native_policy_type: NativePolicyType
    ) -> Dict[PolicyEntityKey, Policy]:
        """
        Return the subset of policies declared with the given native policy type.

        The first policy seen for a key is kept.
        """
        filtered: Dict[PolicyEntityKey, Policy] = {}
        for key, policy in policies.items():
            if policy.type == native_policy_type.value:
                filtered.setdefault(key, policy)
        return filtered

    def _create_client(self) -> NexusClient:
        try:
            return NexusClient.from_parameters(self.parameters)
        except HttpClientConfigError as e:
            raise PolicyModelError(
                HTTPStatus.NOT_ACCEPTABLE,
                f"errors on creating the http client for nexus access: {e}",
            ) from e
