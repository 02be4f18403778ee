"""Tests for endpoint and driver-command resolution."""

from __future__ import annotations

from urllib.parse import urlsplit

import pytest

from safari_launcher.launcher.resolver import (
    DriverCommand,
    format_locator,
    resolve_driver_command,
    resolve_endpoint,
)
from safari_launcher.shared.models import EndpointConfig


class TestResolveEndpoint:
    def test_defaults(self) -> None:
        endpoint = resolve_endpoint(None)
        assert (endpoint.scheme, endpoint.host, endpoint.port, endpoint.path) == ("http", "127.0.0.1", 4444, "/")
        assert format_locator(endpoint) == "http://127.0.0.1:4444/"

    def test_port_override(self) -> None:
        endpoint = resolve_endpoint({"port": 9001})
        assert endpoint.port == 9001
        assert endpoint.host == "127.0.0.1"
        assert format_locator(endpoint) == "http://127.0.0.1:9001/"

    def test_none_values_fall_back_to_defaults(self) -> None:
        endpoint = resolve_endpoint({"port": None, "host": None})
        assert endpoint.port == 4444
        assert endpoint.host == "127.0.0.1"

    def test_legacy_key_names(self) -> None:
        endpoint = resolve_endpoint(
            {"protocol": "https:", "hostname": "driver.local", "port": "5555", "pathname": "wd/hub"}
        )
        assert endpoint.scheme == "https"
        assert endpoint.host == "driver.local"
        assert endpoint.port == 5555
        assert endpoint.path == "/wd/hub"
        assert format_locator(endpoint) == "https://driver.local:5555/wd/hub"

    def test_unknown_fields_pass_through(self) -> None:
        endpoint = resolve_endpoint({"port": 4445, "keepAlive": True})
        assert endpoint.port == 4445
        assert endpoint.model_extra == {"keepAlive": True}
        assert format_locator(endpoint) == "http://127.0.0.1:4445/"

    def test_existing_config_returned_as_is(self) -> None:
        endpoint = EndpointConfig(port=1234)
        assert resolve_endpoint(endpoint) is endpoint

    def test_ipv6_host_is_bracketed(self) -> None:
        endpoint = resolve_endpoint({"host": "::1"})
        assert format_locator(endpoint) == "http://[::1]:4444/"

    @pytest.mark.parametrize(
        "overrides",
        [{}, {"port": 9001}, {"host": "10.0.0.5", "path": "/wd"}, {"scheme": "https", "port": 443}],
    )
    def test_locator_is_well_formed(self, overrides: dict) -> None:
        endpoint = resolve_endpoint(overrides)
        parts = urlsplit(format_locator(endpoint))
        assert parts.scheme == endpoint.scheme
        assert parts.hostname == endpoint.host
        assert parts.port == endpoint.port


class TestResolveDriverCommand:
    def test_platform_default(self) -> None:
        command = resolve_driver_command(EndpointConfig(port=9001), platform="darwin", environ={})
        assert command == DriverCommand(executable="/usr/bin/safaridriver", args=("-p", "9001"))

    def test_env_override_wins(self) -> None:
        command = resolve_driver_command(
            EndpointConfig(),
            platform="darwin",
            environ={"SAFARI_BIN": "/opt/tp/safaridriver"},
        )
        assert command.executable == "/opt/tp/safaridriver"
        assert command.args == ("-p", "4444")

    def test_unknown_platform_without_override(self) -> None:
        command = resolve_driver_command(EndpointConfig(), platform="linux", environ={})
        assert command.executable is None
        assert command.display() == "<unresolved> -p 4444"

    def test_custom_table_and_variable(self) -> None:
        command = resolve_driver_command(
            EndpointConfig(),
            platform="linux",
            environ={"MY_DRIVER": "/usr/local/bin/wd"},
            default_cmd={"linux": "/usr/bin/wd"},
            env_cmd="MY_DRIVER",
        )
        assert command.executable == "/usr/local/bin/wd"
