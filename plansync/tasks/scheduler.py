import logging
from datetime import datetime, timezone
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from flask import Flask

from plansync.services.cache import PlanCache
from plansync.tasks.sync import SyncOrchestrator

logger = logging.getLogger(__name__)

SYNC_JOB_ID = "plans_sync"
MANUAL_SYNC_JOB_ID = "plans_sync_manual"
CACHE_SWEEP_JOB_ID = "cache_sweep"


class PlanSyncScheduler:
    """
    Background scheduler for the periodic sync and the cache sweep.

    Every job runs inside the Flask application context and logs its own
    failures, so a failing run never stops the schedule.
    """

    def __init__(
        self,
        app: Flask,
        orchestrator: SyncOrchestrator,
        cache: PlanCache,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self.app = app
        self.orchestrator = orchestrator
        self.cache = cache
        self.sync_interval = app.config["SYNC_INTERVAL"]
        self.sweep_interval = app.config["CACHE_SWEEP_INTERVAL"]
        self.scheduler = scheduler or BackgroundScheduler(
            timezone=app.config.get("TIMEZONE", "UTC"),
            job_defaults={
                "coalesce": True,  # Combine missed runs into one
                "max_instances": 1,
            },
        )

    @property
    def is_running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        if self.is_running:
            logger.warning("Scheduler already running")
            return

        # The first run fires right away: that is the initial sync at boot.
        self.scheduler.add_job(
            self.run_sync,
            trigger=IntervalTrigger(seconds=self.sync_interval),
            id=SYNC_JOB_ID,
            name="Sync plans from provider",
            next_run_time=datetime.now(timezone.utc),
            replace_existing=True,
        )
        self.scheduler.add_job(
            self.run_cache_sweep,
            trigger=IntervalTrigger(seconds=self.sweep_interval),
            id=CACHE_SWEEP_JOB_ID,
            name="Sweep expired cache entries",
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            f"Scheduler started: sync every {self.sync_interval}s, "
            f"cache sweep every {self.sweep_interval}s"
        )

    def shutdown(self) -> None:
        if not self.is_running:
            return
        self.scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")

    def trigger_now(self) -> bool:
        """
        Schedules an immediate one-off sync.

        Returns:
            False when a sync is already running, True otherwise.
        """
        if self.orchestrator.is_syncing:
            return False

        if self.is_running:
            self.scheduler.add_job(
                self.run_sync,
                id=MANUAL_SYNC_JOB_ID,
                name="Manual plans sync",
                replace_existing=True,
            )
        else:
            # No background worker available; run in the caller's thread.
            self.run_sync()
        return True

    def run_sync(self) -> None:
        with self.app.app_context():
            try:
                self.orchestrator.sync()
            except Exception as e:
                logger.error(f"Scheduled sync failed: {e}", exc_info=True)

    def run_cache_sweep(self) -> None:
        try:
            self.cache.sweep()
        except Exception as e:
            logger.error(f"Cache sweep failed: {e}", exc_info=True)
