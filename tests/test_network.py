"""
Tests for the SSID providers.

subprocess.run is patched throughout; iwgetid is never executed.
"""

import subprocess
from unittest.mock import MagicMock, patch

from bangserve.services.network import (
    IwgetidProvider,
    StaticNetworkProvider,
    provider_from_settings,
)


def _completed(stdout=b"", returncode=0):
    result = MagicMock()
    result.stdout = stdout
    result.returncode = returncode
    return result


class TestIwgetidProvider:
    """Test SSID probing and its failure modes."""

    def test_returns_stripped_ssid(self):
        with patch("bangserve.services.network.subprocess.run", return_value=_completed(b"BVSD-Staff\n")) as run:
            assert IwgetidProvider().current_ssid() == "BVSD-Staff"
        run.assert_called_once_with(["iwgetid", "-r"], capture_output=True, timeout=1.0)

    def test_missing_utility_is_none(self):
        with patch("bangserve.services.network.subprocess.run", side_effect=FileNotFoundError("iwgetid")):
            assert IwgetidProvider().current_ssid() is None

    def test_timeout_is_none(self):
        err = subprocess.TimeoutExpired(["iwgetid", "-r"], 1.0)
        with patch("bangserve.services.network.subprocess.run", side_effect=err):
            assert IwgetidProvider().current_ssid() is None

    def test_permission_error_is_none(self):
        with patch("bangserve.services.network.subprocess.run", side_effect=PermissionError()):
            assert IwgetidProvider().current_ssid() is None

    def test_nonzero_exit_is_none(self):
        """iwgetid exits non-zero when not associated with a network."""
        with patch("bangserve.services.network.subprocess.run", return_value=_completed(b"", 255)):
            assert IwgetidProvider().current_ssid() is None

    def test_empty_output_is_none(self):
        with patch("bangserve.services.network.subprocess.run", return_value=_completed(b"\n")):
            assert IwgetidProvider().current_ssid() is None

    def test_non_utf8_output_is_none(self):
        with patch("bangserve.services.network.subprocess.run", return_value=_completed(b"\xff\xfe\n")):
            assert IwgetidProvider().current_ssid() is None

    def test_custom_command_and_timeout(self):
        provider = IwgetidProvider(command=("nmcli", "-t", "-f", "active,ssid"), timeout=0.5)
        with patch("bangserve.services.network.subprocess.run", return_value=_completed(b"x")) as run:
            provider.current_ssid()
        run.assert_called_once_with(["nmcli", "-t", "-f", "active,ssid"], capture_output=True, timeout=0.5)


class TestStaticNetworkProvider:
    """Test the fixed-answer provider."""

    def test_returns_configured_ssid(self):
        assert StaticNetworkProvider("Home").current_ssid() == "Home"

    def test_defaults_to_none(self):
        assert StaticNetworkProvider().current_ssid() is None


class TestProviderFromSettings:
    """Test provider selection from the [network] section."""

    def test_pinned_ssid_gives_static_provider(self):
        provider = provider_from_settings({"network": {"ssid": "Home"}})
        assert isinstance(provider, StaticNetworkProvider)
        assert provider.current_ssid() == "Home"

    def test_default_is_iwgetid(self):
        provider = provider_from_settings({})
        assert isinstance(provider, IwgetidProvider)
        assert provider.command == ["iwgetid", "-r"]
        assert provider.timeout == 1.0

    def test_command_and_timeout_from_settings(self):
        settings = {"network": {"ssid": "", "ssid_command": ["my-ssid"], "ssid_timeout": 2}}
        provider = provider_from_settings(settings)
        assert provider.command == ["my-ssid"]
        assert provider.timeout == 2.0

    def test_string_command_is_split(self):
        provider = provider_from_settings({"network": {"ssid_command": "iwgetid -r wlan0"}})
        assert provider.command == ["iwgetid", "-r", "wlan0"]

    def test_malformed_command_uses_default(self):
        provider = provider_from_settings({"network": {"ssid_command": 42}})
        assert provider.command == ["iwgetid", "-r"]

    def test_blank_string_command_uses_default(self):
        provider = provider_from_settings({"network": {"ssid_command": "   "}})
        assert provider.command == ["iwgetid", "-r"]
