"""
Base classes for log filtering system
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class FilterDecision(IntEnum):
    """Outcome of a single filter in the chain"""

    DENY = -1
    NEUTRAL = 0
    ACCEPT = 1


@dataclass
class FilterResult:
    """Result of running a record through a filter chain"""

    should_log: bool
    decision: FilterDecision = FilterDecision.NEUTRAL
    decided_by: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class LogFilter(ABC):
    """Abstract base class for log filters

    Filters form an ordered chain. Each filter returns DENY to drop the
    record, ACCEPT to emit it without consulting the rest of the chain, or
    NEUTRAL to let the next filter decide.

    ``decide`` must not raise. Anything that can go wrong with a filter's
    settings is checked in ``activate_options`` when the chain is built.
    """

    def activate_options(self) -> None:
        """Validate settings once configuration is complete"""
        pass

    @abstractmethod
    def decide(
        self, record: logging.LogRecord, context: Dict[str, Any]
    ) -> FilterDecision:
        """Return the decision for this record"""
        pass
