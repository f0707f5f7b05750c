"""Unit tests for the command-line entry point."""

import json
import logging

import pytest

from pricefeeds.main import entry_to_dict, main, parse_pairs
from pricefeeds.src.FeedRegistry import DEFAULT_REGISTRY, FeedEntry
from pricefeeds.src.Network import Network
from pricefeeds.src.PricePair import PricePair

ETH_USD_MAINNET = "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables read by the CLI."""
    for var in (
        "NETWORK",
        "PAIRS",
        "FEED_STALENESS_SECONDS",
        "FEED_DEVIATION_BPS",
        "FEED_HEARTBEAT_SECONDS",
        "FEED_MIN_ANSWERS",
        "FEED_MAX_GAS_PRICE_WEI",
    ):
        monkeypatch.delenv(var, raising=False)


class TestParsePairs:
    """Test parse_pairs()."""

    def test_empty(self) -> None:
        """None or empty string should give no pairs."""
        assert parse_pairs(None) == []
        assert parse_pairs("") == []

    def test_strips_and_skips_blanks(self) -> None:
        """Whitespace and empty items should be dropped."""
        assert parse_pairs(" eth/usd, ,btc/usd ,") == ["eth/usd", "btc/usd"]


class TestEntryToDict:
    """Test entry_to_dict()."""

    def test_fields(self) -> None:
        """All fields should be rendered as JSON-friendly values."""
        entry = FeedEntry(Network.MAINNET, PricePair.ETH_USD, ETH_USD_MAINNET)
        data = entry_to_dict(entry)
        assert data == {
            "network": "mainnet",
            "chain_id": 1,
            "pair": "ETH/USD",
            "feed_id": "0x" + PricePair.ETH_USD.feed_id.hex(),
            "address": ETH_USD_MAINNET,
        }
        json.dumps(data)


class TestMainLookup:
    """Test single and multi pair lookups."""

    def test_default_lookup(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Defaults should print mainnet ETH/USD."""
        main([])
        out = capsys.readouterr().out
        assert "mainnet" in out
        assert "ETH/USD" in out
        assert ETH_USD_MAINNET in out

    def test_env_defaults(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """NETWORK and PAIRS should be used when flags are absent."""
        monkeypatch.setenv("NETWORK", "avalanche")
        monkeypatch.setenv("PAIRS", "avax/usd")
        main([])
        out = capsys.readouterr().out
        expected = DEFAULT_REGISTRY.get_feed_address(Network.AVALANCHE, PricePair.AVAX_USD)
        assert expected in out

    def test_json_lookup(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--json should print a list of entries."""
        main(["--network", "42161", "--pairs", "eth/usd,btc/usd", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert [d["pair"] for d in data] == ["ETH/USD", "BTC/USD"]
        assert all(d["network"] == "arbitrum" for d in data)

    def test_unsupported_pair_exits(
        self, capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
    ) -> None:
        """An unsupported pair should log an error and exit with status 1."""
        with caplog.at_level(logging.ERROR):
            with pytest.raises(SystemExit) as exc:
                main(["--network", "mainnet", "--pairs", "eth/usd,avax/usd"])
        assert exc.value.code == 1
        assert "AVAX/USD has no feed on mainnet" in caplog.text
        assert capsys.readouterr().out == ""

    def test_unknown_pair_exits(self, caplog: pytest.LogCaptureFixture) -> None:
        """An unknown pair tag should exit with status 1."""
        with caplog.at_level(logging.ERROR):
            with pytest.raises(SystemExit) as exc:
                main(["--pairs", "sol/usd"])
        assert exc.value.code == 1
        assert "Unknown price pair" in caplog.text

    def test_unknown_network_is_usage_error(self) -> None:
        """An unknown network should be an argparse error."""
        with pytest.raises(SystemExit) as exc:
            main(["--network", "solana"])
        assert exc.value.code == 2

    def test_empty_pairs_is_usage_error(self) -> None:
        """An empty pair list should be an argparse error."""
        with pytest.raises(SystemExit) as exc:
            main(["--pairs", " , "])
        assert exc.value.code == 2


class TestMainList:
    """Test --list output."""

    def test_list_network(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--list should print every feed of one network."""
        main(["--list", "--network", "sepolia", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert len(data) == len(DEFAULT_REGISTRY.supported_pairs(Network.SEPOLIA))
        assert {d["chain_id"] for d in data} == {int(Network.SEPOLIA)}

    def test_all_networks_requires_list(self) -> None:
        """--all-networks without --list should be an argparse error."""
        with pytest.raises(SystemExit) as exc:
            main(["--all-networks"])
        assert exc.value.code == 2

    def test_list_all_networks(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--list --all-networks should print the whole table."""
        main(["--list", "--all-networks"])
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == len(DEFAULT_REGISTRY)


class TestMainThresholds:
    """Test --show-thresholds output."""

    def test_show_thresholds_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Thresholds should reflect environment overrides."""
        monkeypatch.setenv("FEED_MIN_ANSWERS", "7")
        main(["--show-thresholds", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["min_answers"] == 7
        assert data["staleness_seconds"] == 3600

    def test_show_thresholds_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Text output should list one threshold per line."""
        main(["--show-thresholds"])
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 5
        assert lines[0].split() == ["staleness_seconds", "3600"]

    def test_invalid_threshold_is_usage_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An invalid override should be an argparse error."""
        monkeypatch.setenv("FEED_DEVIATION_BPS", "abc")
        with pytest.raises(SystemExit) as exc:
            main(["--show-thresholds"])
        assert exc.value.code == 2
