"""Create plans, enrollments, counters and ledger balances."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "001_create_billing_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "billing_counters",
        sa.Column("name", sa.String(), primary_key=True, nullable=False),
        sa.Column("value", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
    )
    # Seeded so every plan-id increment is an UPDATE of an existing row
    counter_table = sa.table(
        "billing_counters",
        sa.column("name", sa.String()),
        sa.column("value", sa.BigInteger()),
    )
    op.bulk_insert(counter_table, [{"name": "plan_id", "value": 0}])

    op.create_table(
        "plans",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False, nullable=False),
        sa.Column("owner", sa.String(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(256), nullable=False, server_default=sa.text("''")),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("period", sa.BigInteger(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.CheckConstraint("period > 0", name="ck_plans_period_positive"),
    )
    op.create_index("ix_plans_owner", "plans", ["owner"])

    op.create_table(
        "enrollments",
        sa.Column("account", sa.String(), primary_key=True, nullable=False),
        sa.Column(
            "plan_id",
            sa.Integer(),
            sa.ForeignKey("plans.id"),
            primary_key=True,
            nullable=False,
        ),
        sa.Column("start_tick", sa.BigInteger(), nullable=False),
        sa.Column("next_payment_tick", sa.BigInteger(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("payment_count", sa.Integer(), nullable=False, server_default=sa.text("1")),
    )

    op.create_table(
        "ledger_accounts",
        sa.Column("account", sa.String(), primary_key=True, nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("balance >= 0", name="ck_ledger_accounts_balance_non_negative"),
    )


def downgrade() -> None:
    op.drop_table("ledger_accounts")
    op.drop_table("enrollments")
    op.drop_index("ix_plans_owner", table_name="plans")
    op.drop_table("plans")
    op.drop_table("billing_counters")
