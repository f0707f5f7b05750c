"""PricePair: Enumeration of base/quote pairs with a fixed-size feed id.

The symbolic tag of a pair is "BASE/QUOTE". Its 32-byte feed id is computed as:
    keccak256("BASE/QUOTE")

so the same pair can be named either by tag or by hash, which is how
on-chain consumers usually key feeds.

.. code-block:: python

    >>> PricePair.from_string("eth/usd")
    <PricePair.ETH_USD: 'ETH/USD'>
    >>> len(PricePair.ETH_USD.feed_id)
    32
    >>> PricePair.from_feed_id(PricePair.BTC_USD.feed_id)
    <PricePair.BTC_USD: 'BTC/USD'>
"""

from __future__ import annotations

from enum import Enum

from web3 import Web3

# Length in bytes of a keccak256 feed id.
FEED_ID_LENGTH = 32


class PricePair(Enum):
    """Supported base/quote price pairs."""

    ETH_USD = "ETH/USD"
    BTC_USD = "BTC/USD"
    LINK_USD = "LINK/USD"
    USDC_USD = "USDC/USD"
    USDT_USD = "USDT/USD"
    DAI_USD = "DAI/USD"
    AVAX_USD = "AVAX/USD"
    MATIC_USD = "MATIC/USD"

    def __str__(self) -> str:
        """Return the symbolic tag (e.g., "ETH/USD")."""
        return self.value

    @property
    def base(self) -> str:
        """Base asset symbol."""
        return self.value.split("/")[0]

    @property
    def quote(self) -> str:
        """Quote asset symbol."""
        return self.value.split("/")[1]

    @property
    def feed_id(self) -> bytes:
        """Compute the keccak256 feed id of the symbolic tag.

        :returns: 32-byte hash of the tag.
        """
        return _FEED_IDS[self]

    @classmethod
    def from_feed_id(cls, feed_id: bytes) -> PricePair:
        """Resolve a pair from its raw 32-byte feed id.

        :param feed_id: keccak256 hash of the pair tag.
        :returns: Matching PricePair member.
        :raises ValueError: If the id has the wrong length or matches no pair.
        """
        if len(feed_id) != FEED_ID_LENGTH:
            raise ValueError(
                f"Invalid feed id length {len(feed_id)}, expected {FEED_ID_LENGTH} bytes"
            )
        pair = _PAIRS_BY_FEED_ID.get(bytes(feed_id))
        if pair is None:
            raise ValueError(f"Unknown feed id 0x{bytes(feed_id).hex()}")
        return pair

    @classmethod
    def from_string(cls, value: str) -> PricePair:
        """Parse a pair tag in format "base/quote" or a hex feed id.

        :param value: Pair string like "eth/usd", or "0x" followed by 64 hex digits.
        :returns: Matching PricePair member.
        :raises ValueError: If the value names no supported pair.

        .. code-block:: python

            >>> PricePair.from_string("Link/Usd")
            <PricePair.LINK_USD: 'LINK/USD'>
        """
        text = value.strip()
        if text.lower().startswith("0x"):
            try:
                raw = bytes.fromhex(text[2:])
            except ValueError:
                raise ValueError(f"Invalid feed id '{value}'") from None
            return cls.from_feed_id(raw)

        parts = text.upper().split("/")
        if len(parts) != 2:
            raise ValueError(
                f"Invalid pair format '{value}'. Expected 'base/quote' (e.g., 'eth/usd')"
            )
        try:
            return cls("/".join(p.strip() for p in parts))
        except ValueError:
            raise ValueError(f"Unknown price pair '{value}'") from None


# Feed ids are hashed once at import.
_FEED_IDS: dict[PricePair, bytes] = {
    pair: bytes(Web3.keccak(text=pair.value)) for pair in PricePair
}
_PAIRS_BY_FEED_ID: dict[bytes, PricePair] = {
    feed_id: pair for pair, feed_id in _FEED_IDS.items()
}
