"""RoadQuery Seed Providers - Default Seeds for Random Ordering.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional


class SeedProvider(ABC):
    """Supplies the seed used when a request does not carry one."""

    @abstractmethod
    def current_seed(self) -> str:
        pass


class WeeklySeedProvider(SeedProvider):
    """Seed that changes once per ISO week, e.g. "202642".

    The random front page order stays stable for about a week, so users
    going back and forth between results and details pages see the same
    order, while the page still gets a fresh look now and then.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or datetime.now

    def current_seed(self) -> str:
        year, week, _ = self._clock().isocalendar()
        return f"{year}{week:02d}"


class FixedSeedProvider(SeedProvider):
    def __init__(self, seed: str):
        self.seed = seed

    def current_seed(self) -> str:
        return self.seed


__all__ = ["SeedProvider", "WeeklySeedProvider", "FixedSeedProvider"]
