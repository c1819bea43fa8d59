from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from ..constants import GEOCODE_BACKOFF_SECONDS, GEOCODE_MAX_RETRIES
from ..geocoding.limiter import RateLimiter, TokenBucket
from ..geocoding.provider import Geocoder
from ..models.individual import Individual, LatLng
from ..models.resolution_result import AddressResolution
from ..sheets.normalize import IndividualRow, normalize_individual
from .progress import GeocodeProgress

"""Address deduplication and geocoding.

Flow for one individuals upload:
1. Normalize every row and compute its address key.
2. Keep one representative per unique key (first occurrence).
3. Geocode each unique address strictly sequentially, gated by the limiter.
4. Only after every lookup finished, assign coordinates back to every row
   sharing the key. Rows whose address failed are dropped.
   Rows without any address part are dropped too, but are not failures.

Failures never raise; they are counted in AddressResolution.failed_count.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "address_key",
    "geocode_address",
    "resolve_addresses",
]


def address_key(record: Mapping[str, Any]) -> str:
    return normalize_individual(record).address_key


def geocode_address(
    query: str,
    geocoder: Geocoder,
    limiter: RateLimiter,
    *,
    max_retries: int = GEOCODE_MAX_RETRIES,
    backoff_seconds: float = GEOCODE_BACKOFF_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> LatLng | None:
    """Geocode one query under the rate limiter with a bounded retry budget.

    The limiter is asked at most max_retries + 1 times; after each denial
    (except the last) we wait backoff_seconds. Any exception coming out of
    the geocoder is downgraded to None.

    Returns:
        The coordinate, or None when the lookup failed or capacity never
        became available.
    """
    for attempt in range(max_retries + 1):
        if limiter.try_acquire():
            try:
                return geocoder.geocode(query)
            except Exception as e:
                logger.warning(f"geocoder raised for '{query}': {e.__class__.__name__}: {e}")
                return None
        if attempt < max_retries:
            logger.debug(f"rate limit reached, retry {attempt + 1}/{max_retries} in {backoff_seconds}s")
            sleep(backoff_seconds)
    logger.warning(f"rate limit: giving up on '{query}' after {max_retries + 1} attempts")
    return None


def resolve_addresses(
    rows: Sequence[Mapping[str, Any]],
    geocoder: Geocoder,
    limiter: RateLimiter | None = None,
    *,
    max_retries: int = GEOCODE_MAX_RETRIES,
    backoff_seconds: float = GEOCODE_BACKOFF_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    show_progress: bool = False,
) -> AddressResolution:
    """Resolve individuals rows to geocoded Individuals.

    Args:
        rows: records from the individuals file (post header detection)
        geocoder: geocoding collaborator
        limiter: token bucket; a default 1000/min bucket when None
        max_retries: retry budget per address when the limiter denies
        backoff_seconds: wait between limiter retries
        sleep: injectable sleep (tests)
        show_progress: show a tqdm bar over unique addresses (TTY only)

    Returns:
        AddressResolution with the individuals whose address resolved and the
        number of unique addresses that failed.
    """
    if rows is None:
        raise TypeError("rows must be a list of records, got None")
    if limiter is None:
        limiter = TokenBucket()

    normalized: list[IndividualRow] = [normalize_individual(r) for r in rows]

    unique: dict[str, IndividualRow] = {}
    for row in normalized:
        unique.setdefault(row.address_key, row)

    # 全ユニーク住所の試行が終わるまで割当フェーズに進まない
    geocoded: dict[str, LatLng | None] = {}
    with GeocodeProgress(len(unique), enabled=show_progress) as progress:
        for key, row in unique.items():
            progress.start_address(row.query)
            if not row.query:
                logger.debug("skipping rows without an address")
                geocoded[key] = None
            else:
                geocoded[key] = geocode_address(
                    row.query,
                    geocoder,
                    limiter,
                    max_retries=max_retries,
                    backoff_seconds=backoff_seconds,
                    sleep=sleep,
                )
            progress.finish_address(success=geocoded[key] is not None or not row.query)

    # 住所が空の行は失敗に数えず除外のみ
    failed_addresses = [unique[k].query for k, point in geocoded.items() if point is None and unique[k].query]
    for query in failed_addresses:
        logger.warning(f"could not geocode address: '{query}'")

    individuals: list[Individual] = []
    for index, (record, row) in enumerate(zip(rows, normalized)):
        point = geocoded[row.address_key]
        if point is None:
            continue
        individuals.append(
            Individual(
                id=Individual.make_id(point.lat, point.lng, row.first_name, row.last_name, index),
                first_name=row.first_name,
                last_name=row.last_name,
                lat=point.lat,
                lng=point.lng,
                address=row.query,
                record=dict(record),
            )
        )

    logger.info(
        f"geocoded unique_addresses={len(unique)} failed={len(failed_addresses)} individuals={len(individuals)}"
    )
    return AddressResolution(
        individuals=individuals,
        failed_count=len(failed_addresses),
        failed_addresses=failed_addresses,
        unique_addresses=len(unique),
    )
