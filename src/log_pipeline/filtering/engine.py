"""
Filter chain evaluation
"""

import logging
import threading
from collections import defaultdict
from typing import Any, Dict, Iterable, Optional, Tuple

from .base import FilterDecision, FilterResult, LogFilter
from .config import FilterConfig

FilterChain = Tuple[LogFilter, ...]


def build_chain(filters: Optional[Iterable[LogFilter]]) -> FilterChain:
    """Activate each filter and freeze the chain

    Raises ConfigurationError from the first filter with bad settings, so a
    broken chain is rejected before any record reaches it.
    """
    chain = tuple(filters or ())
    for filter_obj in chain:
        filter_obj.activate_options()
    return chain


def decide(
    chain: Optional[FilterChain],
    record: logging.LogRecord,
    context: Optional[Dict[str, Any]] = None,
) -> Tuple[FilterDecision, int]:
    """Walk the chain and return the deciding decision and its index

    The index is -1 when every filter was neutral.
    """
    context = context if context is not None else {}
    for i, filter_obj in enumerate(chain or ()):
        decision = filter_obj.decide(record, context)
        if decision != FilterDecision.NEUTRAL:
            return decision, i
    return FilterDecision.NEUTRAL, -1


def evaluate(
    chain: Optional[FilterChain],
    record: logging.LogRecord,
    context: Optional[Dict[str, Any]] = None,
) -> bool:
    """Return True if the record should be emitted

    DENY and ACCEPT end the walk immediately. A chain that runs out without
    either, including an empty chain, lets the record through.
    """
    decision, _ = decide(chain, record, context)
    return decision != FilterDecision.DENY


class FilterEngine:
    """Evaluates a configured filter chain and keeps decision metrics"""

    def __init__(self, config: FilterConfig):
        self.config = config
        self.chain: FilterChain = build_chain(config.filters)
        self._lock = threading.Lock()
        self.metrics: Dict[str, int] = defaultdict(int)
        self._filter_stats: Dict[str, Dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )

    def reconfigure(self, filters: Iterable[LogFilter]) -> None:
        """Replace the chain; only call while no records are in flight"""
        self.chain = build_chain(filters)

    def should_log(
        self, record: logging.LogRecord, context: Optional[Dict[str, Any]] = None
    ) -> FilterResult:
        """Apply the chain and return the final decision"""
        if not self.config.enabled:
            return FilterResult(should_log=True, decided_by="filtering_disabled")

        chain = self.chain
        decision, index = decide(chain, record, context)
        should_log = decision != FilterDecision.DENY
        decided_by = (
            f"{chain[index].__class__.__name__}_{index}" if index >= 0 else None
        )

        if self.config.collect_metrics:
            self._record(should_log, decision, decided_by)

        return FilterResult(
            should_log=should_log, decision=decision, decided_by=decided_by
        )

    def _record(
        self, should_log: bool, decision: FilterDecision, decided_by: Optional[str]
    ) -> None:
        with self._lock:
            self.metrics["total_evaluated"] += 1
            self.metrics["passed_through" if should_log else "filtered_out"] += 1
            if decided_by is not None:
                self._filter_stats[decided_by][decision.name.lower()] += 1

    def get_metrics(self) -> Dict[str, Any]:
        """Get filtering metrics"""
        with self._lock:
            total_evaluated = self.metrics.get("total_evaluated", 0)
            passed_through = self.metrics.get("passed_through", 0)
            filtered_out = self.metrics.get("filtered_out", 0)
            filter_stats = {k: dict(v) for k, v in self._filter_stats.items()}

        return {
            "summary": {
                "total_evaluated": total_evaluated,
                "passed_through": passed_through,
                "filtered_out": filtered_out,
            },
            "filter_stats": filter_stats,
            "pass_rate": passed_through / max(1, total_evaluated),
        }

    def reset_metrics(self) -> None:
        """Reset all metrics"""
        with self._lock:
            self.metrics.clear()
            self._filter_stats.clear()
