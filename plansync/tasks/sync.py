import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional
from plansync.core.parsing_schemas import ParsedPlan, RawFeed
from plansync.core.transformer import transform_feed
from plansync.models.enums import SyncState
from plansync.models.repository import PlanRepository
from plansync.services.cache import PlanCache
from plansync.services.provider_client import ProviderClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    plans_processed: int
    duration_ms: int
    finished_at: datetime


class SyncOrchestrator:
    """
    Runs the fetch -> transform -> persist -> invalidate pipeline.

    At most one run is active at a time. A run requested while another is in
    progress returns immediately without doing anything; requests are never
    queued.
    """

    def __init__(
        self,
        provider_client: ProviderClient,
        cache: PlanCache,
        repository_factory: Callable[[], PlanRepository],
        transformer: Callable[[RawFeed], List[ParsedPlan]] = transform_feed,
    ):
        self.provider_client = provider_client
        self.cache = cache
        self.repository_factory = repository_factory
        self.transformer = transformer
        self.state = SyncState.IDLE
        self.last_result: Optional[SyncResult] = None
        self.last_error: Optional[str] = None
        self._guard = threading.Lock()

    @property
    def is_syncing(self) -> bool:
        return self.state is SyncState.SYNCING

    def sync(self) -> Optional[SyncResult]:
        """
        Runs one sync cycle.

        Returns:
            The SyncResult, or None when another sync was already running.

        Raises:
            Whatever stage failed (FetchError, ParseError, StorageError...).
            Stages after the failing one are not run and data persisted by
            earlier syncs is left untouched.
        """
        if not self._guard.acquire(blocking=False):
            logger.warning("Sync already in progress, skipping")
            return None

        self.state = SyncState.SYNCING
        started = time.monotonic()
        try:
            logger.info(
                f"Starting plans synchronization from provider "
                f"{self.provider_client.provider_name}"
            )
            feed = self.provider_client.fetch()
            plans = self.transformer(feed)
            self.repository_factory().upsert_plans(plans)
            self.cache.invalidate_all()

            result = SyncResult(
                plans_processed=len(plans),
                duration_ms=int((time.monotonic() - started) * 1000),
                finished_at=datetime.now(timezone.utc),
            )
            self.last_result = result
            self.last_error = None
            logger.info(
                f"Plans synchronization completed successfully: "
                f"{result.plans_processed} plans in {result.duration_ms}ms"
            )
            return result
        except Exception as e:
            self.last_error = str(e)
            logger.error(
                f"Plans synchronization failed after "
                f"{int((time.monotonic() - started) * 1000)}ms: {e}"
            )
            raise
        finally:
            self.state = SyncState.IDLE
            self._guard.release()

    def status(self) -> dict:
        return {
            "is_syncing": self.is_syncing,
            "last_result": self.last_result,
            "last_error": self.last_error,
        }
