import logging
import time
from datetime import datetime
from apifairy import arguments, response, other_responses
from flask import current_app
from . import plans_bp as api
from plansync.api.schemas import (
    ErrorResponseSchema,
    SearchQueryArgsSchema,
    SearchResponseSchema,
)

logger = logging.getLogger(__name__)


@api.route("/search", methods=["GET"])
@arguments(SearchQueryArgsSchema)
@response(SearchResponseSchema, 200)
@other_responses({400: ErrorResponseSchema, 500: ErrorResponseSchema})
def search_plans(args: dict):
    """
    Lists the online plans whose event window overlaps the requested range.

    A plan is returned when it starts inside [starts_at, ends_at), ends
    inside (starts_at, ends_at], or covers the whole range. Results are
    served from cache when available and otherwise from the database.
    """
    request_started = time.monotonic()
    starts_at: datetime = args["starts_at"]
    ends_at: datetime = args["ends_at"]

    search_service = current_app.extensions["search_service"]
    plans = search_service.search(starts_at, ends_at)

    response_time_ms = int((time.monotonic() - request_started) * 1000)
    logger.info(
        f"Search request completed: {len(plans)} plans in {response_time_ms}ms"
    )

    return {
        "data": plans,
        "meta": {"count": len(plans), "response_time": f"{response_time_ms}ms"},
        "error": None,
    }
