from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import SQLAlchemyError
from plansync.models.plan import Plan, Zone
from plansync.models.enums import SellModeEnum
from plansync.core.errors import StorageError
from plansync.core.parsing_schemas import ParsedPlan, PlanStats, to_naive_utc
from datetime import datetime, timezone
from typing import List
import logging

logger = logging.getLogger(__name__)


class PlanRepository:
    def __init__(self, db_session: Session):
        self.db_session = db_session

    def _upsert_plan(self, parsed_plan: ParsedPlan, current_time: datetime) -> Plan:
        """
        Replaces the plan row by id and fully replaces its zones.
        created_at is only written when the plan is first inserted.
        """
        plan = self.db_session.get(Plan, parsed_plan.id)

        if not plan:
            plan = Plan(id=parsed_plan.id, created_at=current_time)
            self.db_session.add(plan)

        plan.title = parsed_plan.title
        plan.base_plan_id = parsed_plan.base_plan_id
        plan.organizer_company_id = parsed_plan.organizer_company_id
        plan.start_date = parsed_plan.start_date
        plan.end_date = parsed_plan.end_date
        plan.sell_from = parsed_plan.sell_from
        plan.sell_to = parsed_plan.sell_to
        plan.sold_out = parsed_plan.sold_out
        plan.sell_mode = parsed_plan.sell_mode.value
        plan.updated_at = current_time

        # Zones are deleted and reinserted, never merged. The flush between
        # both steps keeps the DELETEs ahead of INSERTs reusing the same keys.
        plan.zones.clear()
        self.db_session.flush()

        plan.zones.extend(
            Zone(
                id=parsed_zone.id,
                name=parsed_zone.name,
                capacity=parsed_zone.capacity,
                price=parsed_zone.price,
                numbered=parsed_zone.numbered,
            )
            for parsed_zone in parsed_plan.zones
        )
        self.db_session.flush()
        return plan

    def upsert_plans(self, plans: List[ParsedPlan]) -> None:
        """
        Inserts or replaces plans and their zones in a single transaction.
        Either every plan of the batch is applied or none is.

        Raises:
            StorageError: If any row fails; the whole batch is rolled back.
        """
        if not plans:
            logger.info("No plans to upsert.")
            return

        current_time = datetime.now(timezone.utc).replace(tzinfo=None)

        try:
            for parsed_plan in plans:
                self._upsert_plan(parsed_plan, current_time)
            self.db_session.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Database error upserting batch of %d plans: %s. Rolling back.",
                len(plans),
                e,
            )
            self.db_session.rollback()
            raise StorageError(f"Failed to upsert plans: {e}") from e

        logger.info("Successfully upserted %d plans", len(plans))

    def search_plans(self, starts_at: datetime, ends_at: datetime) -> List[Plan]:
        """
        Retrieves online plans whose [start_date, end_date] window intersects
        the [starts_at, ends_at) query window, ordered by start date then
        title. Zones are eager loaded, ordered by name.

        A plan matches when it starts inside [starts_at, ends_at), ends inside
        (starts_at, ends_at], or spans the whole query window.
        """
        starts_at = to_naive_utc(starts_at)
        ends_at = to_naive_utc(ends_at)

        try:
            return (
                self.db_session.query(Plan)
                .options(selectinload(Plan.zones))
                .filter(
                    Plan.sell_mode == SellModeEnum.ONLINE.value,
                    or_(
                        and_(Plan.start_date >= starts_at, Plan.start_date < ends_at),
                        and_(Plan.end_date > starts_at, Plan.end_date <= ends_at),
                        and_(Plan.start_date <= starts_at, Plan.end_date >= ends_at),
                    ),
                )
                .order_by(Plan.start_date, Plan.title)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Database error searching plans: %s", e)
            raise StorageError(f"Failed to search plans: {e}") from e

    def get_stats(self) -> PlanStats:
        """
        Aggregates plan and zone counts in a single query. last_sync is the
        most recent updated_at, or None when the store is empty.
        """
        total_zones = select(func.count()).select_from(Zone).scalar_subquery()

        try:
            row = self.db_session.query(
                func.count(Plan.id),
                func.sum(case((Plan.sell_mode == SellModeEnum.ONLINE.value, 1), else_=0)),
                func.sum(case((Plan.sell_mode == SellModeEnum.OFFLINE.value, 1), else_=0)),
                total_zones,
                func.max(Plan.updated_at),
            ).one()
        except SQLAlchemyError as e:
            logger.error("Database error computing stats: %s", e)
            raise StorageError(f"Failed to get stats: {e}") from e

        total_plans, online_plans, offline_plans, zone_count, last_sync = row
        return PlanStats(
            total_plans=total_plans or 0,
            online_plans=online_plans or 0,
            offline_plans=offline_plans or 0,
            total_zones=zone_count or 0,
            last_sync=last_sync,
        )
