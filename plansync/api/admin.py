import logging
from datetime import datetime, timezone
from apifairy import response, other_responses
from flask import current_app
from . import admin_bp as api
from plansync.api.schemas import ErrorResponseSchema, MessageSchema, StatsSchema
from plansync.core.errors import SyncInProgressError

logger = logging.getLogger(__name__)


@api.route("/stats", methods=["GET"])
@response(StatsSchema, 200)
def get_stats():
    """
    Aggregate plan and zone counts plus sync and cache status.
    """
    stats = current_app.extensions["search_service"].get_stats()
    orchestrator = current_app.extensions["sync_orchestrator"]
    scheduler = current_app.extensions["plan_scheduler"]

    return {
        **stats.model_dump(),
        "cache_size": current_app.extensions["plan_cache"].size(),
        "sync": {
            **orchestrator.status(),
            "scheduler_running": scheduler.is_running,
        },
    }


@api.route("/sync", methods=["POST"])
@response(MessageSchema, 202)
@other_responses({409: ErrorResponseSchema})
def trigger_sync():
    """
    Starts a sync right away. Answers 409 if one is already running.
    """
    scheduler = current_app.extensions["plan_scheduler"]
    if not scheduler.trigger_now():
        raise SyncInProgressError("A sync operation is already in progress")

    logger.info("Manual sync triggered")
    return {
        "message": "Sync operation started",
        "timestamp": datetime.now(timezone.utc),
    }


@api.route("/cache", methods=["DELETE"])
@response(MessageSchema, 200)
def clear_cache():
    """
    Drops every cached search and stats entry.
    """
    current_app.extensions["search_service"].clear_cache()
    logger.info("Cache cleared manually")
    return {"message": "Cache cleared", "timestamp": datetime.now(timezone.utc)}
