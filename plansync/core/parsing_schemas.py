from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime, timezone
from plansync.models.enums import SellModeEnum


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are taken as UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Provider feed, as validated from the generic XML tree. Every attribute is
# kept as the raw string the provider sent.


class RawZone(BaseModel):
    zone_id: Optional[str] = None
    name: Optional[str] = None
    capacity: Optional[str] = None
    price: Optional[str] = None
    numbered: Optional[str] = None


class RawPlan(BaseModel):
    plan_id: Optional[str] = None
    plan_start_date: Optional[str] = None
    plan_end_date: Optional[str] = None
    sell_from: Optional[str] = None
    sell_to: Optional[str] = None
    sold_out: Optional[str] = None
    zone: List[RawZone] = Field(default_factory=list)


class RawBasePlan(BaseModel):
    base_plan_id: Optional[str] = None
    sell_mode: Optional[str] = None
    title: Optional[str] = None
    organizer_company_id: Optional[str] = None
    plan: Optional[List[RawPlan]] = None


class RawFeed(BaseModel):
    base_plans: List[RawBasePlan] = Field(default_factory=list)


# Internal entities


class ParsedZone(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    capacity: int = Field(ge=0)
    price: float = Field(ge=0)
    numbered: bool = False


class ParsedPlan(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    base_plan_id: str
    organizer_company_id: Optional[str] = None
    start_date: datetime
    end_date: datetime
    sell_from: datetime
    sell_to: datetime
    sold_out: bool = False
    sell_mode: SellModeEnum
    zones: List[ParsedZone] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator(
        "start_date",
        "end_date",
        "sell_from",
        "sell_to",
        "created_at",
        "updated_at",
    )
    @classmethod
    def _normalize_datetime(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _check_event_window(self) -> "ParsedPlan":
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class PlanStats(BaseModel):
    total_plans: int = 0
    online_plans: int = 0
    offline_plans: int = 0
    total_zones: int = 0
    last_sync: Optional[datetime] = None
