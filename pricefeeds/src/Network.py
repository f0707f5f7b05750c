"""Network: Enumeration of the chains that carry registered price feeds.

Each member's value is the EVM chain id, so a raw integer received from a
caller can be resolved directly:

.. code-block:: python

    >>> Network(42161)
    <Network.ARBITRUM: 42161>
    >>> Network.from_string("ethereum")
    <Network.MAINNET: 1>
    >>> Network.from_string("8453").display_name
    'Base'
"""

from __future__ import annotations

from enum import IntEnum


class Network(IntEnum):
    """Supported blockchain networks, keyed by chain id."""

    MAINNET = 1
    OPTIMISM = 10
    POLYGON = 137
    BASE = 8453
    ARBITRUM = 42161
    AVALANCHE = 43114
    SEPOLIA = 11155111

    def __str__(self) -> str:
        """Return the lowercase network name used on the command line."""
        return self.name.lower()

    @property
    def display_name(self) -> str:
        """Human readable chain name."""
        return _DISPLAY_NAMES[self]

    @property
    def native_symbol(self) -> str:
        """Symbol of the token used to pay gas on this network."""
        return _NATIVE_SYMBOLS.get(self, "ETH")

    @property
    def is_testnet(self) -> bool:
        """Check if this network is a test network."""
        return self is Network.SEPOLIA

    @classmethod
    def from_chain_id(cls, chain_id: int) -> Network:
        """Resolve a network from its numeric chain id.

        :param chain_id: EVM chain id (e.g., 1, 42161).
        :returns: Matching Network member.
        :raises ValueError: If no network has this chain id.
        """
        # bool is an int subclass but never a chain id
        if isinstance(chain_id, bool) or not isinstance(chain_id, int):
            raise ValueError(f"Invalid chain id {chain_id!r}")
        try:
            return cls(chain_id)
        except ValueError:
            raise ValueError(f"Unknown chain id {chain_id}") from None

    @classmethod
    def from_string(cls, value: str) -> Network:
        """Parse a network name, alias or decimal chain id.

        :param value: Network identifier (e.g., "mainnet", "Arbitrum-One", "137").
        :returns: Matching Network member.
        :raises ValueError: If the value names no supported network.

        .. code-block:: python

            >>> Network.from_string("AVAX")
            <Network.AVALANCHE: 43114>
        """
        key = value.strip().lower()
        if key.isdigit():
            return cls.from_chain_id(int(key))

        key = key.replace("_", "-")
        if key in _ALIASES:
            return _ALIASES[key]

        names = ", ".join(str(n) for n in cls)
        raise ValueError(f"Unknown network '{value}'. Expected one of: {names}")


_DISPLAY_NAMES: dict[Network, str] = {
    Network.MAINNET: "Ethereum Mainnet",
    Network.OPTIMISM: "OP Mainnet",
    Network.POLYGON: "Polygon PoS",
    Network.BASE: "Base",
    Network.ARBITRUM: "Arbitrum One",
    Network.AVALANCHE: "Avalanche C-Chain",
    Network.SEPOLIA: "Sepolia Testnet",
}

_NATIVE_SYMBOLS: dict[Network, str] = {
    Network.POLYGON: "MATIC",
    Network.AVALANCHE: "AVAX",
}

_ALIASES: dict[str, Network] = {
    **{str(n): n for n in Network},
    "ethereum": Network.MAINNET,
    "eth": Network.MAINNET,
    "op": Network.OPTIMISM,
    "op-mainnet": Network.OPTIMISM,
    "matic": Network.POLYGON,
    "polygon-pos": Network.POLYGON,
    "arbitrum-one": Network.ARBITRUM,
    "arb": Network.ARBITRUM,
    "avax": Network.AVALANCHE,
    "avalanche-c": Network.AVALANCHE,
    "sepolia-testnet": Network.SEPOLIA,
}
