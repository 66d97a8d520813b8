from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from .datetime_utils import now_local


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return now_local()


@dataclass
class FixedClock:
    """Clock frozen at a given instant (tests, report back-fills)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant
