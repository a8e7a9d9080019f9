from sqlalchemy import (
    Column,
    String,
    Integer,
    Numeric,
    DateTime,
    Boolean,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from plansync.extensions import db


class Plan(db.Model):
    __tablename__ = "plans"

    # Provider-assigned plan_id
    id = Column(String, primary_key=True)

    title = Column(String, nullable=False)
    base_plan_id = Column(String, nullable=False)
    organizer_company_id = Column(String, nullable=True)

    # Naive UTC
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    sell_from = Column(DateTime, nullable=False)
    sell_to = Column(DateTime, nullable=False)
    sold_out = Column(Boolean, nullable=False, default=False)
    sell_mode = Column(String, nullable=False)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    zones = relationship(
        "Zone",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="Zone.name",
        lazy="select",
    )

    __table_args__ = (
        Index("idx_plans_start_date", "start_date"),
        Index("idx_plans_end_date", "end_date"),
        Index("idx_plans_sell_mode", "sell_mode"),
        Index("idx_plans_date_range", "start_date", "end_date"),
    )

    def __repr__(self):
        return f"<Plan id='{self.id}' base_plan_id='{self.base_plan_id}' title='{self.title[:20]}'>"


class Zone(db.Model):
    __tablename__ = "zones"

    # Zone ids are only unique within their plan
    id = Column(String, primary_key=True)
    plan_id = Column(
        String,
        ForeignKey("plans.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    name = Column(String, nullable=False)
    capacity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    numbered = Column(Boolean, nullable=False, default=False)

    plan = relationship("Plan", back_populates="zones", lazy="select")

    __table_args__ = (
        CheckConstraint("capacity >= 0", name="ck_zone_capacity_non_negative"),
        CheckConstraint("price >= 0", name="ck_zone_price_non_negative"),
    )

    def __repr__(self):
        return f"<Zone id='{self.id}' plan_id='{self.plan_id}' name='{self.name}'>"
