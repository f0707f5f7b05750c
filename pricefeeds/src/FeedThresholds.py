"""FeedThresholds: Threshold constants carried alongside the feed table.

None of these values are read by the lookups in FeedRegistry. They are kept
as inert configuration for consumers that validate answers read from the
feeds (staleness, deviation, round counts, gas ceilings).

Values may be overridden from the environment:
    FEED_STALENESS_SECONDS, FEED_DEVIATION_BPS, FEED_HEARTBEAT_SECONDS,
    FEED_MIN_ANSWERS, FEED_MAX_GAS_PRICE_WEI
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields

# Maximum value of a basis-point quantity (100%).
MAX_BPS = 10_000


@dataclass(frozen=True)
class FeedThresholds:
    """Threshold constants for feed consumers. Not consumed by lookups.

    :ivar staleness_seconds: Max age of an answer before it counts as stale.
    :ivar deviation_bps: Max deviation between answers in basis points.
    :ivar heartbeat_seconds: Expected interval between feed updates.
    :ivar min_answers: Minimum number of oracle answers per round.
    :ivar max_gas_price_wei: Gas price ceiling for transactions touching feeds.
    """

    staleness_seconds: int = 3600
    deviation_bps: int = 50
    heartbeat_seconds: int = 86400
    min_answers: int = 3
    max_gas_price_wei: int = 200 * 10**9

    def __post_init__(self) -> None:
        """Validate threshold values.

        :raises ValueError: If a value is not an integer or out of range.
        """
        for field in fields(self):
            value = getattr(self, field.name)
            # bool is an int subclass but never a threshold
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{field.name} must be an integer, got {value!r}")
        if self.staleness_seconds <= 0:
            raise ValueError("staleness_seconds must be positive")
        if not 0 < self.deviation_bps <= MAX_BPS:
            raise ValueError(f"deviation_bps must be between 1 and {MAX_BPS}")
        if self.heartbeat_seconds <= 0:
            raise ValueError("heartbeat_seconds must be positive")
        if self.min_answers < 1:
            raise ValueError("min_answers must be at least 1")
        if self.max_gas_price_wei <= 0:
            raise ValueError("max_gas_price_wei must be positive")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> FeedThresholds:
        """Build thresholds from FEED_* environment variables.

        Unset or empty variables keep their default.

        :param environ: Mapping to read instead of os.environ.
        :returns: New FeedThresholds instance.
        :raises ValueError: If a variable is not an integer or out of range.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, int] = {}
        for field in fields(cls):
            var = f"FEED_{field.name.upper()}"
            raw = env.get(var)
            if not raw:
                continue
            try:
                overrides[field.name] = int(raw)
            except ValueError:
                raise ValueError(f"{var} must be an integer, got '{raw}'") from None
        return cls(**overrides)

    def as_dict(self) -> dict[str, int]:
        """Return the thresholds as a plain dict."""
        return asdict(self)


DEFAULT_THRESHOLDS = FeedThresholds()
