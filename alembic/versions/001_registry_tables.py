"""Create the registry tables: reference tables, recommendation index, registry state.

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""

import sqlalchemy as sa
from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None

_TITLED_TABLES = ("parties", "campaigns", "regions")


def upgrade() -> None:
    for table in _TITLED_TABLES:
        op.create_table(
            table,
            sa.Column("id", sa.BigInteger(), nullable=False, autoincrement=False),
            sa.Column("position", sa.Integer(), nullable=False),
            sa.Column("title", sa.String(500), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_position", table, ["position"], unique=True)

    op.create_table(
        "districts",
        sa.Column("id", sa.BigInteger(), nullable=False, autoincrement=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("region_id", sa.BigInteger(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_districts_position", "districts", ["position"], unique=True)
    op.create_index("ix_districts_region_id", "districts", ["region_id"])

    op.create_table(
        "candidates",
        sa.Column("id", sa.BigInteger(), nullable=False, autoincrement=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("party_id", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_candidates_position", "candidates", ["position"], unique=True)

    op.create_table(
        "recommendations",
        sa.Column("campaign_id", sa.BigInteger(), nullable=False, autoincrement=False),
        sa.Column("district_id", sa.BigInteger(), nullable=False, autoincrement=False),
        sa.Column("candidate_id", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("campaign_id", "district_id"),
    )

    op.create_table(
        "registry_state",
        sa.Column("id", sa.Integer(), nullable=False, autoincrement=False),
        sa.Column("master_account_id", sa.String(64), nullable=False),
        sa.Column("initialized_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("registry_state")
    op.drop_table("recommendations")
    op.drop_index("ix_candidates_position", table_name="candidates")
    op.drop_table("candidates")
    op.drop_index("ix_districts_region_id", table_name="districts")
    op.drop_index("ix_districts_position", table_name="districts")
    op.drop_table("districts")
    for table in reversed(_TITLED_TABLES):
        op.drop_index(f"ix_{table}_position", table_name=table)
        op.drop_table(table)
