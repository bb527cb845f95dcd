"""create accounts, platform config and chain tables

Revision ID: 0001_create_accounts_and_chain
Revises:
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa

revision = "0001_create_accounts_and_chain"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=160), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("ix_accounts_address", "accounts", ["address"], unique=True)

    op.create_table(
        "platform_config",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=False, nullable=False),
        sa.Column("platform_fee", sa.Integer(), nullable=False),
        sa.Column("platform_owner", sa.String(length=160), nullable=False),
    )

    op.create_table(
        "blocks",
        sa.Column("height", sa.BigInteger(), primary_key=True, autoincrement=False, nullable=False),
        sa.Column("sender", sa.String(length=160), nullable=False),
        sa.Column("mined_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )

    op.create_table(
        "receipts",
        sa.Column("block_height", sa.BigInteger(), nullable=False),
        sa.Column("tx_index", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("sender", sa.String(length=160), nullable=False),
        sa.Column("function", sa.String(length=128), nullable=False),
        sa.Column("args", sa.JSON(), nullable=False),
        sa.Column("result", sa.Text(), nullable=False),
        sa.Column("ok", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["block_height"], ["blocks.height"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("block_height", "tx_index"),
    )


def downgrade() -> None:
    op.drop_table("receipts")
    op.drop_table("blocks")
    op.drop_table("platform_config")
    op.drop_index("ix_accounts_address", table_name="accounts")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
