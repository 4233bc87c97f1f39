"""
Tests for NexusClient

Tests URL construction, configuration errors and request delegation.
"""
from unittest import mock

import pytest
import requests

from policy_validation import HttpClientConfigError, PolicyValidatorParameters
from policy_validation.nexus_client import NexusClient


@pytest.fixture
def session():
    """Mocked requests session."""
    return mock.Mock(spec=requests.Session)


class TestConstruction:
    """Test NexusClient construction."""

    def test_base_url_plain_http(self, session):
        """Test that the default base URL uses plain HTTP and the Maven service path."""
        client = NexusClient("nexus", "8081", session=session)
        assert client.base_url == "http://nexus:8081/nexus/service/local/artifact/maven/"

    def test_base_url_https(self, session):
        """Test the HTTPS variant."""
        client = NexusClient("nexus", 8443, https=True, session=session)
        assert client.base_url.startswith("https://nexus:8443/")

    @pytest.mark.parametrize("host", [None, "", "  "])
    def test_blank_host(self, host):
        """Test that a blank host cannot build a client."""
        with pytest.raises(HttpClientConfigError):
            NexusClient(host, "8081")

    @pytest.mark.parametrize("port", [None, "", "abc", "0", "70000"])
    def test_bad_port(self, port):
        """Test that a non-numeric or out of range port cannot build a client."""
        with pytest.raises(HttpClientConfigError):
            NexusClient("nexus", port)

    def test_from_parameters(self):
        """Test that host, port and timeout come from the validator parameters."""
        params = PolicyValidatorParameters(nexus_name="repo", nexus_port="9000", nexus_timeout_seconds=3)
        client = NexusClient.from_parameters(params)
        try:
            assert client.host == "repo"
            assert client.port == 9000
            assert client.timeout == 3
        finally:
            client.close()


class TestGet:
    """Test NexusClient.get()."""

    def test_get_joins_path_and_passes_timeout(self, session):
        """Test that the path is appended to the base URL and the timeout is used."""
        client = NexusClient("nexus", "8081", timeout=2.5, session=session)

        client.get("resolve", params={"r": "releases", "g": "g", "a": "a", "v": "1"})

        session.get.assert_called_once_with(
            "http://nexus:8081/nexus/service/local/artifact/maven/resolve",
            params={"r": "releases", "g": "g", "a": "a", "v": "1"},
            timeout=2.5,
        )

    def test_get_without_params(self, session):
        """Test that a GET without query parameters passes params=None."""
        client = NexusClient("nexus", "8081", session=session)

        client.get("/status")

        session.get.assert_called_once_with(
            "http://nexus:8081/nexus/service/local/artifact/maven/status",
            params=None,
            timeout=10.0,
        )

    def test_get_propagates_transport_errors(self, session):
        """Test that transport errors reach the caller."""
        session.get.side_effect = requests.ConnectionError("Connection refused")
        client = NexusClient("nexus", "8081", session=session)

        with pytest.raises(requests.ConnectionError):
            client.get("resolve")

    def test_context_manager_closes_session(self, session):
        """Test that leaving the with block closes the session."""
        with NexusClient("nexus", "8081", session=session):
            pass
        session.close.assert_called_once()
