"""create plans and zones

Revision ID: 3b1f6c2a9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3b1f6c2a9d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "plans",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("base_plan_id", sa.String(), nullable=False),
        sa.Column("organizer_company_id", sa.String(), nullable=True),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("sell_from", sa.DateTime(), nullable=False),
        sa.Column("sell_to", sa.DateTime(), nullable=False),
        sa.Column("sold_out", sa.Boolean(), nullable=False),
        sa.Column("sell_mode", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_plans_start_date", "plans", ["start_date"], unique=False)
    op.create_index("idx_plans_end_date", "plans", ["end_date"], unique=False)
    op.create_index("idx_plans_sell_mode", "plans", ["sell_mode"], unique=False)
    op.create_index(
        "idx_plans_date_range", "plans", ["start_date", "end_date"], unique=False
    )

    op.create_table(
        "zones",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("plan_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("numbered", sa.Boolean(), nullable=False),
        sa.CheckConstraint("capacity >= 0", name="ck_zone_capacity_non_negative"),
        sa.CheckConstraint("price >= 0", name="ck_zone_price_non_negative"),
        sa.ForeignKeyConstraint(["plan_id"], ["plans.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", "plan_id"),
    )
    op.create_index("ix_zones_plan_id", "zones", ["plan_id"], unique=False)


def downgrade():
    op.drop_index("ix_zones_plan_id", table_name="zones")
    op.drop_table("zones")
    op.drop_index("idx_plans_date_range", table_name="plans")
    op.drop_index("idx_plans_sell_mode", table_name="plans")
    op.drop_index("idx_plans_end_date", table_name="plans")
    op.drop_index("idx_plans_start_date", table_name="plans")
    op.drop_table("plans")
