"""Tests for frozen Pydantic domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from safari_launcher.shared.models import EndpointConfig


class TestEndpointConfig:
    def test_create_with_defaults(self) -> None:
        endpoint = EndpointConfig()
        assert endpoint.scheme == "http"
        assert endpoint.host == "127.0.0.1"
        assert endpoint.port == 4444
        assert endpoint.path == "/"
        assert endpoint.url == "http://127.0.0.1:4444/"

    def test_frozen_raises_on_mutation(self) -> None:
        endpoint = EndpointConfig()
        with pytest.raises(ValidationError):
            endpoint.port = 5555  # type: ignore[misc]

    def test_invalid_port_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EndpointConfig(port="not-a-port")

    def test_scheme_normalized(self) -> None:
        assert EndpointConfig(scheme="HTTP:").scheme == "http"

    def test_blank_host_uses_default(self) -> None:
        assert EndpointConfig(host="  ").host == "127.0.0.1"

    def test_netloc(self) -> None:
        assert EndpointConfig(host="localhost", port=9001).netloc == "localhost:9001"
