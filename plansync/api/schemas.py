from marshmallow import fields
from plansync.extensions import ma
from plansync.models.enums import SellModeEnum

API_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class HealthSchema(ma.Schema):
    status = fields.String(
        required=True,
        metadata={
            "description": "Indicates the health status of the service.",
            "example": "ok",
        },
    )
    timestamp = fields.DateTime(format=API_DATETIME_FORMAT)


class SearchQueryArgsSchema(ma.Schema):
    starts_at = fields.DateTime(
        required=True,
        allow_none=False,
        metadata={
            "description": "Start of the search window (ISO 8601 format). Example: 2021-06-01T00:00:00Z"
        },
    )
    ends_at = fields.DateTime(
        required=True,
        allow_none=False,
        metadata={
            "description": "End of the search window (ISO 8601 format). Example: 2021-07-01T00:00:00Z"
        },
    )


class ZoneSchema(ma.Schema):
    id = fields.String(
        required=True, metadata={"description": "Provider identifier of the zone."}
    )
    name = fields.String(required=True, metadata={"description": "Name of the zone."})
    capacity = fields.Integer(
        required=True, metadata={"description": "Capacity of the zone."}
    )
    price = fields.Float(required=True, metadata={"description": "Price for the zone."})
    numbered = fields.Boolean(
        required=True, metadata={"description": "Whether seats are numbered."}
    )


class PlanSchema(ma.Schema):
    id = fields.String(
        required=True, metadata={"description": "Provider identifier of the plan."}
    )
    title = fields.String(required=True, metadata={"description": "Title of the plan."})
    base_plan_id = fields.String(
        required=True,
        metadata={"description": "Identifier of the base plan grouping variants."},
    )
    organizer_company_id = fields.String(allow_none=True)
    start_date = fields.DateTime(format=API_DATETIME_FORMAT, required=True)
    end_date = fields.DateTime(format=API_DATETIME_FORMAT, required=True)
    sell_from = fields.DateTime(format=API_DATETIME_FORMAT, required=True)
    sell_to = fields.DateTime(format=API_DATETIME_FORMAT, required=True)
    sold_out = fields.Boolean(required=True)
    sell_mode = fields.Enum(SellModeEnum, by_value=True, required=True)
    zones = fields.List(
        fields.Nested(ZoneSchema),
        required=True,
        metadata={"description": "Zones of the plan, ordered by name."},
    )
    created_at = fields.DateTime(format=API_DATETIME_FORMAT)
    updated_at = fields.DateTime(format=API_DATETIME_FORMAT)


class SearchMetaSchema(ma.Schema):
    count = fields.Integer(required=True)
    response_time = fields.String(
        required=True, metadata={"description": "Server time spent, e.g. '12ms'."}
    )


class SearchResponseSchema(ma.Schema):
    data = fields.List(fields.Nested(PlanSchema), required=True)
    meta = fields.Nested(SearchMetaSchema, required=True)
    error = fields.Raw(
        required=True,
        allow_none=True,
        metadata={"description": "Should be null for success responses."},
    )


class SyncResultSchema(ma.Schema):
    plans_processed = fields.Integer()
    duration_ms = fields.Integer()
    finished_at = fields.DateTime(format=API_DATETIME_FORMAT)


class SyncStatusSchema(ma.Schema):
    is_syncing = fields.Boolean(required=True)
    scheduler_running = fields.Boolean(required=True)
    last_result = fields.Nested(SyncResultSchema, allow_none=True)
    last_error = fields.String(allow_none=True)


class StatsSchema(ma.Schema):
    total_plans = fields.Integer(required=True)
    online_plans = fields.Integer(required=True)
    offline_plans = fields.Integer(required=True)
    total_zones = fields.Integer(required=True)
    last_sync = fields.DateTime(format=API_DATETIME_FORMAT, allow_none=True)
    cache_size = fields.Integer(required=True)
    sync = fields.Nested(SyncStatusSchema, required=True)


class MessageSchema(ma.Schema):
    message = fields.String(required=True)
    timestamp = fields.DateTime(format=API_DATETIME_FORMAT)


class ErrorDetailSchema(ma.Schema):
    code = fields.String(required=True, metadata={"description": "Error code"})
    message = fields.String(
        required=True, metadata={"description": "Detail of the error"}
    )


class ErrorResponseSchema(ma.Schema):
    data = fields.Raw(
        required=True,
        allow_none=True,
        metadata={"description": "Should be null for error responses."},
    )
    error = fields.Nested(ErrorDetailSchema, required=True)
