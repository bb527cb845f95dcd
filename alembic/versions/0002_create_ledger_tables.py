"""create content, subscription, rating, playlist and purchase tables

Revision ID: 0002_create_ledger_tables
Revises: 0001_create_accounts_and_chain
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0002_create_ledger_tables"
down_revision = "0001_create_accounts_and_chain"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "content",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("creator", sa.String(length=160), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("is_nft", sa.Boolean(), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=False),
        sa.Column("is_premium", sa.Boolean(), nullable=False),
        sa.Column("rating_total", sa.BigInteger(), server_default=sa.text("0"), nullable=False),
        sa.Column("rating_count", sa.BigInteger(), server_default=sa.text("0"), nullable=False),
        sa.Column("published_at_height", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_content_creator"), "content", ["creator"], unique=False)
    op.create_index(op.f("ix_content_category"), "content", ["category"], unique=False)

    op.create_table(
        "subscriptions",
        sa.Column("subscriber", sa.String(length=160), nullable=False),
        sa.Column("creator", sa.String(length=160), nullable=False),
        sa.Column("duration", sa.BigInteger(), nullable=False),
        sa.Column("subscription_type", sa.String(length=64), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("started_at_height", sa.BigInteger(), nullable=False),
        sa.Column("expires_at_height", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("subscriber", "creator"),
    )
    op.create_index(op.f("ix_subscriptions_creator"), "subscriptions", ["creator"], unique=False)

    op.create_table(
        "ratings",
        sa.Column("content_id", sa.BigInteger(), nullable=False),
        sa.Column("rater", sa.String(length=160), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("rated_at_height", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["content_id"], ["content.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("content_id", "rater"),
    )

    op.create_table(
        "playlists",
        sa.Column("owner", sa.String(length=160), nullable=False),
        sa.Column("playlist_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("created_at_height", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("owner", "playlist_id"),
    )

    op.create_table(
        "playlist_items",
        sa.Column("owner", sa.String(length=160), nullable=False),
        sa.Column("playlist_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("position", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("content_id", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(
            ["owner", "playlist_id"],
            ["playlists.owner", "playlists.playlist_id"],
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(["content_id"], ["content.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("owner", "playlist_id", "position"),
    )
    op.create_index(op.f("ix_playlist_items_content_id"), "playlist_items", ["content_id"], unique=False)

    op.create_table(
        "purchases",
        sa.Column("content_id", sa.BigInteger(), nullable=False),
        sa.Column("buyer", sa.String(length=160), nullable=False),
        sa.Column("price_paid", sa.BigInteger(), nullable=False),
        sa.Column("platform_cut", sa.BigInteger(), nullable=False),
        sa.Column("creator_cut", sa.BigInteger(), nullable=False),
        sa.Column("purchased_at_height", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["content_id"], ["content.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("content_id", "buyer"),
    )


def downgrade() -> None:
    op.drop_table("purchases")
    op.drop_index(op.f("ix_playlist_items_content_id"), table_name="playlist_items")
    op.drop_table("playlist_items")
    op.drop_table("playlists")
    op.drop_table("ratings")
    op.drop_index(op.f("ix_subscriptions_creator"), table_name="subscriptions")
    op.drop_table("subscriptions")
    op.drop_index(op.f("ix_content_category"), table_name="content")
    op.drop_index(op.f("ix_content_creator"), table_name="content")
    op.drop_table("content")
