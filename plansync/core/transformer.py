import logging
import math
import re
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import ValidationError
from plansync.core.parsing_schemas import (
    ParsedPlan,
    ParsedZone,
    RawBasePlan,
    RawFeed,
    RawPlan,
    RawZone,
)

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_bool(value: Optional[str]) -> bool:
    # Only the exact literal counts; "True" or "1" are false.
    return value == "true"


def _to_int(value: Optional[str]) -> int:
    # Leading integer digits win, so "10.0" is 10 and "12 seats" is 12.
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else 0


def _to_price(value: Optional[str]) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    return price if math.isfinite(price) else 0.0


def _transform_zone(raw_zone: RawZone) -> ParsedZone:
    try:
        return ParsedZone(
            id=raw_zone.zone_id,
            name=raw_zone.name,
            capacity=_to_int(raw_zone.capacity),
            price=_to_price(raw_zone.price),
            numbered=_to_bool(raw_zone.numbered),
        )
    except ValidationError as e:
        raise ValueError(f"zone {raw_zone.zone_id}: {e}") from e


def _transform_plan(
    base_plan: RawBasePlan, raw_plan: RawPlan, transformed_at: datetime
) -> ParsedPlan:
    return ParsedPlan(
        id=raw_plan.plan_id,
        title=base_plan.title,
        base_plan_id=base_plan.base_plan_id,
        organizer_company_id=base_plan.organizer_company_id,
        start_date=raw_plan.plan_start_date,
        end_date=raw_plan.plan_end_date,
        sell_from=raw_plan.sell_from,
        sell_to=raw_plan.sell_to,
        sold_out=_to_bool(raw_plan.sold_out),
        sell_mode=base_plan.sell_mode,
        zones=[_transform_zone(raw_zone) for raw_zone in raw_plan.zone],
        created_at=transformed_at,
        updated_at=transformed_at,
    )


def transform_feed(feed: RawFeed) -> List[ParsedPlan]:
    """
    Maps the provider feed to internal plans, one per provider plan element.

    Never fails as a whole: a plan that cannot be mapped is logged and
    skipped, and its siblings are still transformed.
    """
    transformed_at = datetime.now(timezone.utc)
    plans: List[ParsedPlan] = []

    logger.debug(f"Processing {len(feed.base_plans)} base plans from provider")

    for base_plan in feed.base_plans:
        if base_plan.plan is None:
            logger.debug(
                f"Skipping base plan {base_plan.base_plan_id} - no plans list"
            )
            continue

        for raw_plan in base_plan.plan:
            try:
                plans.append(_transform_plan(base_plan, raw_plan, transformed_at))
            except (ValidationError, ValueError, TypeError) as e:
                logger.warning(
                    f"Failed to transform plan {raw_plan.plan_id} of base plan "
                    f"{base_plan.base_plan_id}: {e}. Skipping plan."
                )

    logger.info(f"Successfully transformed {len(plans)} plans from provider data")
    return plans
