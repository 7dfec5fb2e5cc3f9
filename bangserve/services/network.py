"""
Network Context - Report the wireless network we're connected to.

The SSID is a trust signal for picking the default search engine.
Probing is best-effort: a missing utility, a timeout, a non-zero exit,
empty output or undecodable output all mean "no SSID" and never raise.
"""

import shlex
import subprocess
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from loguru import logger

DEFAULT_SSID_COMMAND = ("iwgetid", "-r")


class NetworkContextProvider(ABC):
    """Capability for looking up the current wireless network name."""

    @abstractmethod
    def current_ssid(self) -> Optional[str]:
        """Return the SSID, or None if it can't be determined."""
        ...


class IwgetidProvider(NetworkContextProvider):
    """
    Ask a platform utility (iwgetid by default) for the SSID.

    Runs once per call with a short timeout; no caching, no retry.
    """

    def __init__(self, command: Sequence[str] = DEFAULT_SSID_COMMAND, timeout: float = 1.0):
        self.command = list(command)
        self.timeout = timeout

    def current_ssid(self) -> Optional[str]:
        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"SSID probe {self.command[0]!r} failed: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"SSID probe exited with status {result.returncode}")
            return None

        try:
            ssid = result.stdout.decode("utf-8").strip()
        except UnicodeDecodeError:
            logger.debug("SSID probe returned non-UTF-8 output")
            return None

        return ssid or None


class StaticNetworkProvider(NetworkContextProvider):
    """Always report the same SSID (or None)."""

    def __init__(self, ssid: Optional[str] = None):
        self.ssid = ssid

    def current_ssid(self) -> Optional[str]:
        return self.ssid


def provider_from_settings(settings: dict) -> NetworkContextProvider:
    """
    Build the provider described by the [network] settings section.

    A non-empty `ssid` pins the answer (handy on hosts without wifi);
    otherwise `ssid_command` (an array, or a shell-style string) is run
    with `ssid_timeout`.
    """
    network = settings.get("network", {})
    if network.get("ssid"):
        return StaticNetworkProvider(network["ssid"])
    command = network.get("ssid_command") or DEFAULT_SSID_COMMAND
    if isinstance(command, str):
        command = shlex.split(command)
    elif not isinstance(command, (list, tuple)) or not all(isinstance(arg, str) for arg in command):
        logger.warning(f"Ignoring malformed ssid_command {command!r}, using {' '.join(DEFAULT_SSID_COMMAND)}")
        command = DEFAULT_SSID_COMMAND

    return IwgetidProvider(
        command=command or DEFAULT_SSID_COMMAND,
        timeout=float(network.get("ssid_timeout", 1.0)),
    )
