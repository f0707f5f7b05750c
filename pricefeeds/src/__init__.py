"""Price Feed Registry - Static Feed Address Lookup

This module maps (network, price pair) to price feed contract addresses:
- Network: Supported chains keyed by chain id
- PricePair: Base/quote pairs with keccak256 feed ids
- FeedRegistry: Read-only lookup with supported-feed predicate
- FeedThresholds: Inert threshold constants for feed consumers
"""

from .FeedRegistry import (
    DEFAULT_REGISTRY,
    FEED_ADDRESSES,
    FeedEntry,
    FeedRegistry,
    FeedRegistryError,
    UnsupportedNetwork,
    UnsupportedPair,
    get_feed_address,
    is_feed_supported,
)
from .FeedThresholds import DEFAULT_THRESHOLDS, FeedThresholds
from .Network import Network
from .PricePair import PricePair

__all__ = [
    "DEFAULT_REGISTRY",
    "DEFAULT_THRESHOLDS",
    "FEED_ADDRESSES",
    "FeedEntry",
    "FeedRegistry",
    "FeedRegistryError",
    "FeedThresholds",
    "Network",
    "PricePair",
    "UnsupportedNetwork",
    "UnsupportedPair",
    "get_feed_address",
    "is_feed_supported",
]
