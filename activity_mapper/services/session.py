from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from ..geocoding.limiter import RateLimiter, TokenBucket
from ..geocoding.provider import Geocoder
from ..models.config_models import MapperConfig
from ..models.individual import Individual
from ..models.resolution_result import ActivityResolution, AddressResolution
from .addresses import resolve_addresses
from .aggregate import aggregate_neighborhoods
from .facilitators import resolve_activities

"""Session state for one mapping session (in memory only).

Individuals and activity results each live in a VersionedCell. A computation
reserves a ticket before it starts and commits with that ticket when it
ends; a commit whose ticket is older than the committed version is dropped,
so a slow earlier upload can never overwrite a later one.

Activity resolution reads the individuals snapshot at the moment it starts,
never a reference captured earlier.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "VersionedCell",
    "MapperSession",
]

T = TypeVar("T")


class VersionedCell(Generic[T]):
    """Value + monotonically increasing version stamp."""

    def __init__(self, initial: T) -> None:
        self._lock = threading.Lock()
        self._value = initial
        self._version = 0
        self._issued = 0

    def reserve(self) -> int:
        """Hand out a ticket for a computation that will commit later."""
        with self._lock:
            self._issued += 1
            return self._issued

    def commit(self, ticket: int, value: T) -> bool:
        """Store value if ticket is newer than the committed version."""
        with self._lock:
            if ticket <= self._version:
                return False
            self._value = value
            self._version = ticket
            return True

    def replace(self, value: T) -> None:
        """In-place edit of the current value (keeps the version)."""
        with self._lock:
            self._value = value

    def snapshot(self) -> tuple[int, T]:
        with self._lock:
            return self._version, self._value

    @property
    def value(self) -> T:
        return self.snapshot()[1]

    @property
    def version(self) -> int:
        return self.snapshot()[0]


class MapperSession:
    """Holds the latest individuals and activity results for one session.

    Individuals are replaced wholesale on upload (or edited by point delete);
    activity markers are recomputed whenever individuals change.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        config: MapperConfig | None = None,
        *,
        limiter: RateLimiter | None = None,
        sleep: Callable[[float], None] = time.sleep,
        show_progress: bool = False,
    ) -> None:
        self.config = config or MapperConfig()
        self.geocoder = geocoder
        self.limiter = limiter or TokenBucket(
            self.config.rate_limit.capacity, self.config.rate_limit.window_seconds
        )
        self._sleep = sleep
        self._show_progress = show_progress
        self._individuals: VersionedCell[AddressResolution] = VersionedCell(
            AddressResolution(individuals=[], failed_count=0)
        )
        self._activity_rows: VersionedCell[list[dict[str, Any]]] = VersionedCell([])
        self._activities: VersionedCell[ActivityResolution] = VersionedCell(ActivityResolution.empty())

    @property
    def individuals(self) -> list[Individual]:
        return list(self._individuals.value.individuals)

    @property
    def failed_count(self) -> int:
        return self._individuals.value.failed_count

    @property
    def address_resolution(self) -> AddressResolution:
        return self._individuals.value

    @property
    def activities(self) -> ActivityResolution:
        return self._activities.value

    @property
    def neighborhoods(self) -> list[str]:
        return aggregate_neighborhoods(self.individuals)

    def load_individuals(self, records: Sequence[Mapping[str, Any]]) -> AddressResolution:
        """Geocode an individuals upload and make it the current table."""
        ticket = self._individuals.reserve()
        rl = self.config.rate_limit
        result = resolve_addresses(
            records,
            self.geocoder,
            self.limiter,
            max_retries=rl.max_retries,
            backoff_seconds=rl.backoff_seconds,
            sleep=self._sleep,
            show_progress=self._show_progress,
        )
        if self._individuals.commit(ticket, result):
            self._recompute_activities()
        else:
            logger.debug(f"discarding stale individuals result (ticket {ticket})")
        return result

    def load_activities(self, records: Sequence[Mapping[str, Any]]) -> ActivityResolution:
        """Resolve an activities upload against the current individuals."""
        rows = [dict(r) for r in records]
        ticket = self._activity_rows.reserve()
        if not self._activity_rows.commit(ticket, rows):
            logger.debug(f"discarding stale activities upload (ticket {ticket})")
            return self._activities.value
        return self._recompute_activities()

    def remove_individual(self, individual_id: str) -> bool:
        """Point delete by id. Returns False when no individual has that id."""
        current = self._individuals.value
        kept = [ind for ind in current.individuals if ind.id != individual_id]
        if len(kept) == len(current.individuals):
            return False
        self._individuals.replace(
            AddressResolution(
                individuals=kept,
                failed_count=current.failed_count,
                failed_addresses=current.failed_addresses,
                unique_addresses=current.unique_addresses,
            )
        )
        self._recompute_activities()
        return True

    def _recompute_activities(self) -> ActivityResolution:
        ticket = self._activities.reserve()
        # 開始時点の最新スナップショットを読む
        individuals = self._individuals.value.individuals
        rows = self._activity_rows.value
        result = resolve_activities(rows, individuals, radius=self.config.marker_radius_deg)
        if not self._activities.commit(ticket, result):
            logger.debug(f"discarding stale activity result (ticket {ticket})")
            return self._activities.value
        return result
