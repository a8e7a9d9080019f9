from datetime import datetime, timezone
from apifairy import response
from . import health_bp as api
from plansync.api.schemas import HealthSchema


@api.route("/", methods=["GET"])
@response(HealthSchema, 200)
def health():
    """Liveness check."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc)}
