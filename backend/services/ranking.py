"""
Geocoding result ranking.

Combines the general search with an optional country-restricted search,
removes duplicate places and floats priority-country matches to the front.
Provider failures count as empty results; this module never raises them.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from domain.models import PlaceCandidate
from services.country_priority import DEFAULT_PRIORITY_COUNTRY, PriorityCountry
from services.open_meteo import ProviderUnavailable

MAX_RANKED_RESULTS = 10

logger = logging.getLogger(__name__)


def dedupe_by_coordinates(candidates: Iterable[PlaceCandidate]) -> List[PlaceCandidate]:
    """Drop repeated (latitude, longitude) keys; first occurrence wins."""
    seen = set()
    unique: List[PlaceCandidate] = []
    for candidate in candidates:
        if candidate.key in seen:
            continue
        seen.add(candidate.key)
        unique.append(candidate)
    return unique


def partition_priority(
    candidates: Sequence[PlaceCandidate],
    priority: PriorityCountry,
) -> List[PlaceCandidate]:
    """Stable partition: priority-country matches first, both halves keep their order."""
    preferred = [c for c in candidates if priority.is_priority(c)]
    others = [c for c in candidates if not priority.is_priority(c)]
    return preferred + others


def rank_candidates(
    restricted: Sequence[PlaceCandidate],
    general: Sequence[PlaceCandidate],
    priority: PriorityCountry = DEFAULT_PRIORITY_COUNTRY,
    limit: int = MAX_RANKED_RESULTS,
) -> List[PlaceCandidate]:
    """Merge restricted-then-general results, dedupe, partition and cap."""
    merged = list(restricted) + list(general)
    return partition_priority(dedupe_by_coordinates(merged), priority)[:limit]


def _absorb_failure(label: str, term: str, call: Callable[[], List[PlaceCandidate]]) -> List[PlaceCandidate]:
    try:
        return call()
    except ProviderUnavailable as exc:
        logger.warning("%s geocoding failed for %r: %s", label, term, exc)
        return []


class RankingEngine:
    """
    Smart geocoding over a client exposing `search(term)` and
    `search_in_country(term, country_code)`.

    With `parallel=True` the two searches are issued on a small thread pool and
    joined before merging; the merge order is fixed, so arrival order never
    affects the output.
    """

    def __init__(
        self,
        client,
        priority: Optional[PriorityCountry] = None,
        parallel: bool = True,
        limit: int = MAX_RANKED_RESULTS,
    ):
        self.client = client
        self.priority = priority or DEFAULT_PRIORITY_COUNTRY
        self.parallel = parallel
        self.limit = limit

    def _general(self, term: str) -> List[PlaceCandidate]:
        return _absorb_failure("General", term, lambda: self.client.search(term))

    def _restricted(self, term: str) -> List[PlaceCandidate]:
        return _absorb_failure(
            self.priority.name,
            term,
            lambda: self.client.search_in_country(term, self.priority.code),
        )

    def fetch(self, term: str) -> Tuple[List[PlaceCandidate], List[PlaceCandidate]]:
        """Return (restricted, general) raw result lists for `term`."""
        wants_restricted = self.priority.term_suggests_country(term)
        if not wants_restricted:
            return [], self._general(term)

        if not self.parallel:
            return self._restricted(term), self._general(term)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="geocode") as pool:
            general_future = pool.submit(self._general, term)
            restricted_future = pool.submit(self._restricted, term)
            return restricted_future.result(), general_future.result()

    def rank(self, term: str) -> List[PlaceCandidate]:
        term = term.strip()
        restricted, general = self.fetch(term)
        ranked = rank_candidates(restricted, general, self.priority, self.limit)
        logger.debug(
            "RankingEngine.rank: term=%r restricted=%d general=%d ranked=%d",
            term,
            len(restricted),
            len(general),
            len(ranked),
        )
        return ranked
