# bangserve Services Package
"""
System integration for bangserve.

Services query the host environment (currently: the wireless SSID).
"""

from .network import IwgetidProvider, NetworkContextProvider, StaticNetworkProvider

__all__ = ["IwgetidProvider", "NetworkContextProvider", "StaticNetworkProvider"]
