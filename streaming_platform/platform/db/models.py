import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from streaming_platform.platform.db.base import Base

# BigInteger columns are signed 64-bit on every backend
MAX_BIGINT = 2**63 - 1

TITLE_LENGTH = 256
CATEGORY_LENGTH = 64
SUBSCRIPTION_TYPE_LENGTH = 64
PLAYLIST_NAME_LENGTH = 256


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(String(160), unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class PlatformConfig(Base):
    __tablename__ = "platform_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    platform_fee: Mapped[int] = mapped_column(Integer, nullable=False)
    platform_owner: Mapped[str] = mapped_column(String(160), nullable=False)


class Block(Base):
    __tablename__ = "blocks"

    height: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    sender: Mapped[str] = mapped_column(String(160), nullable=False)
    mined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Receipt(Base):
    __tablename__ = "receipts"

    block_height: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("blocks.height", ondelete="CASCADE"),
        primary_key=True,
    )
    tx_index: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    sender: Mapped[str] = mapped_column(String(160), nullable=False)
    function: Mapped[str] = mapped_column(String(128), nullable=False)
    args: Mapped[list] = mapped_column(JSON, nullable=False)
    result: Mapped[str] = mapped_column(Text, nullable=False)
    ok: Mapped[bool] = mapped_column(Boolean, nullable=False)


class Content(Base):
    __tablename__ = "content"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    creator: Mapped[str] = mapped_column(String(160), index=True)

    title: Mapped[str] = mapped_column(String(TITLE_LENGTH))
    description: Mapped[str] = mapped_column(Text)
    price: Mapped[int] = mapped_column(BigInteger)
    is_nft: Mapped[bool] = mapped_column(Boolean, default=False)
    category: Mapped[str] = mapped_column(String(CATEGORY_LENGTH), index=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)

    rating_total: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default=text("0"))
    rating_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default=text("0"))

    published_at_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Subscription(Base):
    __tablename__ = "subscriptions"

    subscriber: Mapped[str] = mapped_column(String(160), primary_key=True)
    creator: Mapped[str] = mapped_column(String(160), primary_key=True, index=True)

    duration: Mapped[int] = mapped_column(BigInteger, nullable=False)
    subscription_type: Mapped[str] = mapped_column(String(SUBSCRIPTION_TYPE_LENGTH), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    started_at_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expires_at_height: Mapped[int] = mapped_column(BigInteger, nullable=False)


class Rating(Base):
    __tablename__ = "ratings"

    content_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("content.id", ondelete="CASCADE"),
        primary_key=True,
    )
    rater: Mapped[str] = mapped_column(String(160), primary_key=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    rated_at_height: Mapped[int] = mapped_column(BigInteger, nullable=False)


class Playlist(Base):
    __tablename__ = "playlists"

    owner: Mapped[str] = mapped_column(String(160), primary_key=True)
    playlist_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(PLAYLIST_NAME_LENGTH), nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at_height: Mapped[int] = mapped_column(BigInteger, nullable=False)


class PlaylistItem(Base):
    __tablename__ = "playlist_items"
    __table_args__ = (
        ForeignKeyConstraint(
            ["owner", "playlist_id"],
            ["playlists.owner", "playlists.playlist_id"],
            ondelete="CASCADE",
        ),
    )

    owner: Mapped[str] = mapped_column(String(160), primary_key=True)
    playlist_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    content_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("content.id", ondelete="CASCADE"), index=True)


class Purchase(Base):
    __tablename__ = "purchases"

    content_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("content.id", ondelete="CASCADE"),
        primary_key=True,
    )
    buyer: Mapped[str] = mapped_column(String(160), primary_key=True)
    price_paid: Mapped[int] = mapped_column(BigInteger, nullable=False)
    platform_cut: Mapped[int] = mapped_column(BigInteger, nullable=False)
    creator_cut: Mapped[int] = mapped_column(BigInteger, nullable=False)
    purchased_at_height: Mapped[int] = mapped_column(BigInteger, nullable=False)
