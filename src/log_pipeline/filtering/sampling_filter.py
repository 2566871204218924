"""
Sampling and rate limiting filter
"""

import hashlib
import logging
import random
import threading
import time
from collections import defaultdict, deque
from typing import Any, Deque, Dict, Optional

from ..exceptions import ConfigurationError
from .base import FilterDecision, LogFilter

STRATEGIES = ("random", "hash")


class SamplingFilter(LogFilter):
    """Deny records that are sampled out or exceed the rate limit

    Records that survive sampling are passed on (NEUTRAL) so later filters
    still get a say.
    """

    def __init__(
        self,
        sample_rate: float = 1.0,
        strategy: str = "random",
        max_per_second: Optional[int] = None,
    ):
        self.sample_rate = max(0.0, min(1.0, sample_rate))
        self.strategy = strategy
        self.max_per_second = max_per_second

        # Rate limiting state
        self._lock = threading.Lock()
        self._rate_limiter_state: Dict[str, Deque[float]] = defaultdict(deque)

    def activate_options(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ConfigurationError(
                f"Unknown sampling strategy [{self.strategy}], expected one of {STRATEGIES}"
            )
        if self.max_per_second is not None and self.max_per_second < 0:
            raise ConfigurationError("max_per_second must not be negative")

    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        # Apply rate limiting first if configured
        if self.max_per_second is not None and not self._within_rate(record):
            return FilterDecision.DENY

        if self.strategy == "hash":
            sampled = self._hash_sample(record, context)
        else:
            sampled = random.random() < self.sample_rate

        return FilterDecision.NEUTRAL if sampled else FilterDecision.DENY

    def _within_rate(self, record: logging.LogRecord) -> bool:
        """Sliding one second window per logger and level"""
        now = time.time()
        key = f"{record.name}:{record.levelname}"

        with self._lock:
            times = self._rate_limiter_state[key]
            while times and times[0] < now - 1.0:
                times.popleft()

            if len(times) < self.max_per_second:
                times.append(now)
                return True
            return False

    def _hash_sample(self, record: logging.LogRecord, context: Dict[str, Any]) -> bool:
        """Deterministic sampling keyed on request_id or message"""
        hash_key = str(context.get("request_id") or record.getMessage())
        hash_value = int(hashlib.md5(hash_key.encode()).hexdigest()[:8], 16)
        threshold = int(self.sample_rate * 0xFFFFFFFF)
        return hash_value < threshold
