#!/usr/bin/env python3
"""Price Feed Registry.

Looks up price feed contract addresses by network and price pair, and lists
the feeds registered per network.

Run with ``python -m pricefeeds.main``. Options may also be given through
environment variables, see --help.
"""

import argparse
import json
import logging
import os
import sys

from .src.FeedRegistry import DEFAULT_REGISTRY, FeedEntry, FeedRegistryError
from .src.FeedThresholds import FeedThresholds
from .src.Network import Network
from .src.PricePair import PricePair

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_pairs(pairs_str: str | None) -> list[str]:
    """Split a comma-separated pair list.

    Example: eth/usd,btc/usd

    :param pairs_str: Comma-separated pair string.
    :returns: List of stripped, non-empty pair strings.
    """
    if not pairs_str:
        return []
    return [p.strip() for p in pairs_str.split(",") if p.strip()]


def entry_to_dict(entry: FeedEntry) -> dict[str, str | int]:
    """Render a feed entry for JSON output.

    :param entry: Registered feed.
    :returns: Dict with network, chain id, pair, feed id and address.
    """
    return {
        "network": str(entry.network),
        "chain_id": int(entry.network),
        "pair": str(entry.pair),
        "feed_id": "0x" + entry.pair.feed_id.hex(),
        "address": entry.address,
    }


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the Price Feed Registry CLI."""
    networks = ", ".join(str(n) for n in Network)
    pairs = ", ".join(str(p).lower() for p in PricePair)

    parser = argparse.ArgumentParser(
        description="Price Feed Registry: feed contract addresses per network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Networks:
  {networks}

Price pairs:
  {pairs}

Examples:
  # Address of the ETH/USD feed on Ethereum mainnet
  python -m pricefeeds.main --network mainnet --pairs eth/usd

  # Several pairs on Arbitrum as JSON
  python -m pricefeeds.main --network arbitrum --pairs eth/usd,btc/usd --json

  # Every feed on every network
  python -m pricefeeds.main --list --all-networks

Environment variables (CLI args take precedence):
  NETWORK, PAIRS, FEED_STALENESS_SECONDS, FEED_DEVIATION_BPS,
  FEED_HEARTBEAT_SECONDS, FEED_MIN_ANSWERS, FEED_MAX_GAS_PRICE_WEI
""",
    )

    parser.add_argument(
        "--network",
        type=str,
        help="Network name or chain id (e.g., mainnet, arbitrum, 137)",
        default=os.environ.get("NETWORK") or "mainnet",
    )

    parser.add_argument(
        "--pairs",
        type=str,
        help="Comma-separated price pairs (e.g., eth/usd,btc/usd)",
        default=os.environ.get("PAIRS") or "eth/usd",
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="List every feed registered on --network",
    )

    parser.add_argument(
        "--all-networks",
        dest="all_networks",
        action="store_true",
        help="With --list, list feeds of all networks",
    )

    parser.add_argument(
        "--show-thresholds",
        dest="show_thresholds",
        action="store_true",
        help="Print the feed threshold constants (not applied to lookups)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Validate arguments
    if args.all_networks and not args.list:
        parser.error("--all-networks requires --list")

    if args.show_thresholds:
        try:
            thresholds = FeedThresholds.from_env()
        except ValueError as e:
            parser.error(str(e))
        if args.json:
            print(json.dumps(thresholds.as_dict(), indent=2))
        else:
            for name, value in thresholds.as_dict().items():
                print(f"{name:<20} {value}")
        return

    if args.list and args.all_networks:
        entries = DEFAULT_REGISTRY.entries()
    else:
        try:
            network = Network.from_string(args.network)
        except ValueError as e:
            parser.error(str(e))

        if args.list:
            entries = [e for e in DEFAULT_REGISTRY.entries() if e.network == network]
        else:
            requested = parse_pairs(args.pairs)
            if not requested:
                parser.error("At least one price pair must be specified")

            entries = []
            failed = False
            for pair_str in requested:
                try:
                    pair = PricePair.from_string(pair_str)
                    address = DEFAULT_REGISTRY.get_feed_address(network, pair)
                except (ValueError, FeedRegistryError) as e:
                    logger.error(str(e))
                    failed = True
                    continue
                entries.append(FeedEntry(network, pair, address))

            if failed:
                sys.exit(1)

    logger.debug(f"Resolved {len(entries)} feed(s)")

    if args.json:
        print(json.dumps([entry_to_dict(e) for e in entries], indent=2))
    else:
        for entry in entries:
            print(f"{str(entry.network):<10} {str(entry.pair):<10} {entry.address}")


if __name__ == "__main__":
    main()
