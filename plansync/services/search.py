import logging
from datetime import datetime, timezone
from typing import Callable, List
from plansync.core.errors import ValidationError
from plansync.core.parsing_schemas import ParsedPlan, PlanStats, to_naive_utc
from plansync.models.repository import PlanRepository
from plansync.services.cache import PlanCache

logger = logging.getLogger(__name__)

EARLIEST_SEARCH_END = datetime(2000, 1, 1)
MAX_YEARS_AHEAD = 10


def validate_range(starts_at: datetime, ends_at: datetime) -> None:
    """
    Rejects obviously malformed search windows before storage is touched.

    Raises:
        ValidationError: With the message of the violated constraint.
    """
    starts_at = to_naive_utc(starts_at)
    ends_at = to_naive_utc(ends_at)

    if starts_at >= ends_at:
        raise ValidationError("Start date must be before end date")

    now = datetime.now(timezone.utc)
    latest_start = datetime(now.year + MAX_YEARS_AHEAD, 12, 31)
    if starts_at > latest_start:
        raise ValidationError("Start date too far in the future")

    if ends_at < EARLIEST_SEARCH_END:
        raise ValidationError("End date too far in the past")


class SearchService:
    """
    Cache-aside read path over the plan repository.
    """

    def __init__(
        self,
        cache: PlanCache,
        repository_factory: Callable[[], PlanRepository],
        search_timeout: int,
        stats_timeout: int,
    ):
        self.cache = cache
        self.repository_factory = repository_factory
        self.search_timeout = search_timeout
        self.stats_timeout = stats_timeout

    def validate_range(self, starts_at: datetime, ends_at: datetime) -> None:
        validate_range(starts_at, ends_at)

    def search(self, starts_at: datetime, ends_at: datetime) -> List[ParsedPlan]:
        self.validate_range(starts_at, ends_at)

        cache_key = self.cache.search_key(starts_at, ends_at)
        cached_plans = self.cache.get(cache_key)
        if cached_plans is not None:
            logger.debug(f"Cache hit for search query {cache_key}")
            return cached_plans

        logger.debug(f"Cache miss for search query {cache_key}, querying database")
        plans = [
            ParsedPlan.model_validate(plan)
            for plan in self.repository_factory().search_plans(starts_at, ends_at)
        ]
        self.cache.set(cache_key, plans, self.search_timeout)

        logger.info(
            f"Search completed successfully: {starts_at.isoformat()} - "
            f"{ends_at.isoformat()}, {len(plans)} plans"
        )
        return plans

    def get_stats(self) -> PlanStats:
        cached_stats = self.cache.get(PlanCache.STATS_KEY)
        if cached_stats is not None:
            logger.debug("Cache hit for stats")
            return cached_stats

        stats = self.repository_factory().get_stats()
        self.cache.set(PlanCache.STATS_KEY, stats, self.stats_timeout)
        return stats

    def clear_cache(self) -> None:
        self.cache.invalidate_all()
