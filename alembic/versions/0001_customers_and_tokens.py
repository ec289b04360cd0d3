from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "0001_customers_and_tokens"
down_revision = None
branch_labels = None
depends_on = None

_ID_TYPE = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _has_index(inspector, table_name: str, index_name: str) -> bool:
    return any(idx["name"] == index_name for idx in inspector.get_indexes(table_name))


def upgrade() -> None:
    bind = op.get_bind()
    inspector = inspect(bind)

    if "customers" not in inspector.get_table_names():
        op.create_table(
            "customers",
            sa.Column("id", _ID_TYPE, primary_key=True),
            sa.Column("name", sa.String(length=120), nullable=False),
            sa.Column("phone", sa.String(length=30), nullable=False),
            sa.Column("password_hash", sa.String(), nullable=True),
            sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("created", sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint("phone", name="uq_customers_phone"),
        )

    inspector = inspect(bind)
    if "customers_tokens" not in inspector.get_table_names():
        op.create_table(
            "customers_tokens",
            sa.Column("token", sa.String(length=512), primary_key=True),
            sa.Column(
                "customer_id",
                _ID_TYPE,
                sa.ForeignKey("customers.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("expire", sa.DateTime(), nullable=False),
            sa.Column("created", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )
        op.create_index("ix_customers_tokens_customer_id", "customers_tokens", ["customer_id"], unique=False)

    inspector = inspect(bind)
    if "managers" not in inspector.get_table_names():
        op.create_table(
            "managers",
            sa.Column("id", _ID_TYPE, primary_key=True),
            sa.Column("name", sa.String(length=120), nullable=False),
            sa.Column("login", sa.String(length=120), nullable=False),
            sa.Column("password_hash", sa.String(), nullable=False),
            sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("created", sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint("login", name="uq_managers_login"),
        )


def downgrade() -> None:
    bind = op.get_bind()
    inspector = inspect(bind)

    if "managers" in inspector.get_table_names():
        op.drop_table("managers")

    if "customers_tokens" in inspector.get_table_names():
        if _has_index(inspector, "customers_tokens", "ix_customers_tokens_customer_id"):
            op.drop_index("ix_customers_tokens_customer_id", table_name="customers_tokens")
        op.drop_table("customers_tokens")

    inspector = inspect(bind)
    if "customers" in inspector.get_table_names():
        op.drop_table("customers")
