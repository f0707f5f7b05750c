"""FeedRegistry: Read-only lookup of price feed contract addresses.

The registry is a dict of dicts keyed by network, then by price pair:
    FEED_ADDRESSES[Network][PricePair] -> address

A (network, pair) combination either has exactly one address or is
unsupported. Lookups are pure and the tables are frozen after construction.

.. code-block:: python

    >>> registry = FeedRegistry()
    >>> registry.get_feed_address(Network.MAINNET, PricePair.ETH_USD)
    '0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419'
    >>> registry.is_feed_supported(Network.MAINNET, PricePair.AVAX_USD)
    False
    >>> registry.get_feed_address(1, "avax/usd")
    Traceback (most recent call last):
        ...
    UnsupportedPair: Pair AVAX/USD has no feed on mainnet
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from web3 import Web3

from .Network import Network
from .PricePair import PricePair

logger = logging.getLogger(__name__)

NetworkLike = Network | int | str
PairLike = PricePair | str | bytes | bytearray

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Chainlink USD-quoted aggregator proxies per network.
FEED_ADDRESSES: dict[Network, dict[PricePair, str]] = {
    Network.MAINNET: {
        PricePair.ETH_USD: "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419",
        PricePair.BTC_USD: "0xF4030086522a5bEEa4988F8cA5B36dbC97BeE88c",
        PricePair.LINK_USD: "0x2c1d072e956AFFC0D435Cb7AC38EF18d24d9127c",
        PricePair.USDC_USD: "0x8fFfFfd4AfB6115b954Bd326cbe7B4BA576818f6",
        PricePair.USDT_USD: "0x3E7d1eAB13ad0104d2750B8863b489D65364e32D",
        PricePair.DAI_USD: "0xAed0c38402a5d19df6E4c03F4E2DceD6e29c1ee9",
    },
    Network.OPTIMISM: {
        PricePair.ETH_USD: "0x13e3Ee699D1909E989722E753853AE30b17e08c5",
        PricePair.BTC_USD: "0xD702DD976Fb76Fffc2D3963D037dfDae5b04E593",
        PricePair.LINK_USD: "0xCc232dcFAAE6354cE191Bd574108c1aD03f86450",
        PricePair.USDC_USD: "0x16a9FA2FDa030272Ce99B29CF780dFA30361E0f3",
        PricePair.USDT_USD: "0xECef79E109e997bCA29c1c0897ec9d7b03647F5E",
        PricePair.DAI_USD: "0x8dBa75e83DA73cc766A7e5a0ee71F656BAb470d6",
    },
    Network.POLYGON: {
        PricePair.ETH_USD: "0xF9680D99D6C9589e2a93a78A04A279e509205945",
        PricePair.BTC_USD: "0xc907E116054Ad103354f2D350FD2514433D57F6f",
        PricePair.LINK_USD: "0xd9FFdb71EbE7496cC440152d43986Aae0AB76665",
        PricePair.MATIC_USD: "0xAB594600376Ec9fD91F8e885dADF0CE036862dE0",
        PricePair.USDC_USD: "0xfE4A8cc5b5B2366C1B58Bea3858e81843581b2F7",
        PricePair.USDT_USD: "0x0A6513e40db6EB1b165753AD52E80663aeA50545",
        PricePair.DAI_USD: "0x4746DeC9e833A82EC7C2C1356372CcF2cfcD2F3D",
    },
    Network.BASE: {
        PricePair.ETH_USD: "0x71041dddad3595F9CEd3DcCFBe3D1F4b0a16Bb70",
        PricePair.BTC_USD: "0x64c911996D3c6aC71f9b455B1E8E7266BcbD848F",
        PricePair.LINK_USD: "0x17CAb8FE31E32f08326e5E27412894e49B0f9D65",
        PricePair.USDC_USD: "0x7e860098F58bBFC8648a4311b374B1D669a2bc6B",
        PricePair.DAI_USD: "0x591e79239a7d679378eC8c847e5038150364C78F",
    },
    Network.ARBITRUM: {
        PricePair.ETH_USD: "0x639Fe6ab55C921f74e7fac1ee960C0B6293ba612",
        PricePair.BTC_USD: "0x6ce185860a4963106506C203335A2910413708e9",
        PricePair.LINK_USD: "0x86E53CF1B870786351Da77A57575e79CB55812CB",
        PricePair.USDC_USD: "0x50834F3163758fcC1Df9973b6e91f0F0F0434aD3",
        PricePair.USDT_USD: "0x3f3f5dF88dC9F13eac63DF89EC16ef6e7E25DdE7",
        PricePair.DAI_USD: "0xc5C8E77B397E531B8EC06BFb0048328B30E9eCfB",
    },
    Network.AVALANCHE: {
        PricePair.ETH_USD: "0x976B3D034E162d8bD72D6b9C989d545b839003b0",
        PricePair.BTC_USD: "0x2779D32d5166BAaa2B2b658333bA7e6Ec0C65743",
        PricePair.LINK_USD: "0x49ccd9ca821EfEab2b98c60dC60F518E765EDe9a",
        PricePair.AVAX_USD: "0x0A77230d17318075983913bC2145DB16C7366156",
        PricePair.USDC_USD: "0xF096872672F44d6EBA71458D74fe67F9a77a23B9",
        PricePair.USDT_USD: "0xEBE676ee90Fe1112671f19b6B7459bC678B67e8a",
    },
    Network.SEPOLIA: {
        PricePair.ETH_USD: "0x694AA1769357215DE4FAC081bf1f309aDC325306",
        PricePair.BTC_USD: "0x1b44F3514812d835EB1BDB0acB33d3fA3351Ee43",
        PricePair.LINK_USD: "0xc59E3633BAAC79493d908e63626716e204A45EdF",
        PricePair.USDC_USD: "0xA2F78ab2355fe2f984D808B5CeE7FD0A93D5270E",
    },
}


class FeedRegistryError(Exception):
    """Base exception for feed lookup errors."""

    pass


class UnsupportedNetwork(FeedRegistryError):
    """Raised when a network is not in the supported set.

    :ivar network: The network value that was looked up.
    """

    def __init__(self, network: object, reason: str | None = None):
        """Initialize the error.

        :param network: Network value as received from the caller.
        :param reason: Optional detail appended to the message.
        """
        self.network = network
        message = f"Unsupported network {network!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedPair(FeedRegistryError):
    """Raised when a known network has no feed for a pair.

    :ivar network: The resolved network, or None when no network was involved.
    :ivar pair: The pair value that was looked up.
    """

    def __init__(self, network: Network | None, pair: object, reason: str | None = None):
        """Initialize the error.

        :param network: Resolved network.
        :param pair: Pair value as received from the caller.
        :param reason: Optional detail appended to the message.
        """
        self.network = network
        self.pair = pair
        label = str(pair) if isinstance(pair, PricePair) else repr(pair)
        if reason:
            message = f"Unsupported pair {label}: {reason}"
        else:
            message = f"Pair {label} has no feed on {network}"
        super().__init__(message)


@dataclass(frozen=True)
class FeedEntry:
    """A single registered feed.

    :ivar network: Network the feed is deployed on.
    :ivar pair: Price pair served by the feed.
    :ivar address: Checksummed feed contract address.
    """

    network: Network
    pair: PricePair
    address: str


def _normalize_address(network: Network, pair: PricePair, address: str) -> str:
    """Validate a table address and return its checksummed form.

    :raises ValueError: If the address is malformed or the zero address.
    """
    if not isinstance(address, str):
        raise ValueError(f"Feed address for {network}/{pair} must be a string")
    # Lowercase first so a mis-cased literal is not rejected as a bad checksum
    if not Web3.is_address(address.lower()):
        raise ValueError(f"Invalid feed address '{address}' for {network}/{pair}")
    checksummed = Web3.to_checksum_address(address.lower())
    if checksummed == ZERO_ADDRESS:
        raise ValueError(f"Zero address registered for {network}/{pair}")
    return checksummed


class FeedRegistry:
    """Read-only registry of price feed addresses.

    :ivar feeds: Frozen mapping of network to (pair -> checksummed address).
    """

    def __init__(
        self, table: Mapping[Network, Mapping[PricePair, str]] | None = None
    ) -> None:
        """Initialize the registry.

        :param table: Feed table to serve. Defaults to FEED_ADDRESSES.
        :raises ValueError: If the table holds unknown keys or invalid addresses.
        """
        if table is None:
            table = FEED_ADDRESSES
        if not isinstance(table, Mapping):
            raise ValueError("Feed table must be a mapping")

        feeds: dict[Network, Mapping[PricePair, str]] = {}
        for network, pairs in table.items():
            if not isinstance(network, Network):
                raise ValueError(f"Table key {network!r} is not a Network")
            if not isinstance(pairs, Mapping):
                raise ValueError(f"Feed table for {network} must be a mapping")
            normalized: dict[PricePair, str] = {}
            for pair, address in pairs.items():
                if not isinstance(pair, PricePair):
                    raise ValueError(f"Table key {pair!r} on {network} is not a PricePair")
                normalized[pair] = _normalize_address(network, pair, address)
            if normalized:
                feeds[network] = MappingProxyType(normalized)

        self.feeds: Mapping[Network, Mapping[PricePair, str]] = MappingProxyType(feeds)
        logger.debug(
            f"FeedRegistry initialized: {len(self)} feeds across "
            f"{len(self.feeds)} networks"
        )

    def __len__(self) -> int:
        """Return the total number of registered feeds."""
        return sum(len(pairs) for pairs in self.feeds.values())

    def __contains__(self, key: object) -> bool:
        """Check membership of a (network, pair) tuple."""
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        return self.is_feed_supported(key[0], key[1])

    def __iter__(self) -> Iterator[FeedEntry]:
        """Iterate over all entries, ordered by network then pair."""
        return iter(self.entries())

    def _resolve_network(self, network: NetworkLike) -> Network:
        """Resolve a caller supplied network to a member with a sub-table.

        :raises UnsupportedNetwork: If the value names no supported network.
        """
        if isinstance(network, Network):
            resolved = network
        else:
            try:
                if isinstance(network, str):
                    resolved = Network.from_string(network)
                else:
                    resolved = Network.from_chain_id(network)
            except ValueError as e:
                raise UnsupportedNetwork(network, str(e)) from e

        if resolved not in self.feeds:
            raise UnsupportedNetwork(network, "no feeds registered")
        return resolved

    @staticmethod
    def _resolve_pair(network: Network | None, pair: PairLike) -> PricePair:
        """Resolve a caller supplied pair to a PricePair member.

        :raises UnsupportedPair: If the value names no known pair.
        """
        if isinstance(pair, PricePair):
            return pair
        try:
            if isinstance(pair, str):
                return PricePair.from_string(pair)
            if isinstance(pair, (bytes, bytearray)):
                return PricePair.from_feed_id(bytes(pair))
        except ValueError as e:
            raise UnsupportedPair(network, pair, str(e)) from e
        raise UnsupportedPair(network, pair, "expected a PricePair, tag or feed id")

    def get_feed_address(self, network: NetworkLike, pair: PairLike) -> str:
        """Look up the feed address for a network and pair.

        :param network: Network member, chain id or network name.
        :param pair: PricePair member, "base/quote" tag or feed id.
        :returns: Checksummed feed contract address.
        :raises UnsupportedNetwork: If the network is not supported.
        :raises UnsupportedPair: If the network has no feed for the pair.
        """
        resolved_network = self._resolve_network(network)
        resolved_pair = self._resolve_pair(resolved_network, pair)
        address = self.feeds[resolved_network].get(resolved_pair)
        if address is None:
            raise UnsupportedPair(resolved_network, resolved_pair)
        return address

    def is_feed_supported(self, network: NetworkLike, pair: PairLike) -> bool:
        """Check whether a feed exists for a network and pair. Never raises.

        :param network: Network member, chain id or network name.
        :param pair: PricePair member, "base/quote" tag or feed id.
        :returns: True exactly when get_feed_address() would succeed.
        """
        try:
            self.get_feed_address(network, pair)
        except FeedRegistryError:
            return False
        return True

    def supported_networks(self) -> tuple[Network, ...]:
        """Return networks with at least one feed, ordered by chain id."""
        return tuple(sorted(self.feeds))

    def supported_pairs(self, network: NetworkLike) -> tuple[PricePair, ...]:
        """Return the pairs registered on a network.

        :param network: Network member, chain id or network name.
        :returns: Pairs in declaration order of PricePair.
        :raises UnsupportedNetwork: If the network is not supported.
        """
        pairs = self.feeds[self._resolve_network(network)]
        return tuple(p for p in PricePair if p in pairs)

    def networks_for_pair(self, pair: PairLike) -> tuple[Network, ...]:
        """Return the networks that carry a feed for a pair.

        :param pair: PricePair member, "base/quote" tag or feed id.
        :returns: Networks ordered by chain id (may be empty).
        :raises UnsupportedPair: If the pair is unknown.
        """
        resolved = self._resolve_pair(None, pair)
        return tuple(n for n in self.supported_networks() if resolved in self.feeds[n])

    def entries(self) -> list[FeedEntry]:
        """Return every registered feed, ordered by network then pair."""
        return [
            FeedEntry(network, pair, self.feeds[network][pair])
            for network in self.supported_networks()
            for pair in self.supported_pairs(network)
        ]


# Process-wide registry over the built-in table.
DEFAULT_REGISTRY = FeedRegistry()


def get_feed_address(network: NetworkLike, pair: PairLike) -> str:
    """Look up a feed address in the default registry.

    :raises UnsupportedNetwork: If the network is not supported.
    :raises UnsupportedPair: If the network has no feed for the pair.
    """
    return DEFAULT_REGISTRY.get_feed_address(network, pair)


def is_feed_supported(network: NetworkLike, pair: PairLike) -> bool:
    """Check whether the default registry has a feed for a network and pair."""
    return DEFAULT_REGISTRY.is_feed_supported(network, pair)
