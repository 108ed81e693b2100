"""BeamDEX client core - concentrated-liquidity DEX client for Massa."""

from beamdex.client import BeamDexClient, get_default_client

__version__ = "0.1.0"
__all__ = ["BeamDexClient", "get_default_client", "__version__"]
