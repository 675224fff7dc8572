"""
Asset SQLAlchemy model.
One row per uploaded 3D model, looked up publicly by its short identifier.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from showcase.db.base import Base

DEFAULT_QUANTITY = 100
DEFAULT_SOLD = 0

# Counters that may only change through an atomic delta or an admin edit
COUNTER_COLUMNS = ("views", "likes", "qty", "sold")

INFO_SLOTS = {
    "topLeft": "info_top_left",
    "topRight": "info_top_right",
    "bottomLeft": "info_bottom_left",
    "bottomRight": "info_bottom_right",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Asset(Base):
    """
    Shareable 3D model record.

    The file bytes live in object storage; the record keeps their public
    URLs and storage keys together with engagement and inventory counters.
    """
    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint("views >= 0", name="ck_assets_views_non_negative"),
        CheckConstraint("likes >= 0", name="ck_assets_likes_non_negative"),
        CheckConstraint("qty >= 0", name="ck_assets_qty_non_negative"),
        CheckConstraint("sold >= 0", name="ck_assets_sold_non_negative"),
        CheckConstraint("model_url <> ''", name="ck_assets_model_url_not_empty"),
    )

    # ===================
    # Identity
    # ===================
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="Internal identifier",
    )
    short_id: Mapped[str] = mapped_column(
        String(21),
        nullable=False,
        unique=True,
        index=True,
        comment="Public share identifier",
    )

    # ===================
    # Content
    # ===================
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )
    model_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Public URL of the 3D model file",
    )
    model_key: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
        comment="Object storage key of the model file",
    )
    background_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        default="",
        comment="Public URL of the background image, empty if none",
    )
    background_key: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
        comment="Object storage key of the background image",
    )

    # ===================
    # Display annotations
    # ===================
    info_top_left: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    info_top_right: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    info_bottom_left: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    info_bottom_right: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    # ===================
    # Counters
    # ===================
    views: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Successful fetches by short identifier",
    )
    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Net likes, floored at zero",
    )
    qty: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_QUANTITY,
        server_default=str(DEFAULT_QUANTITY),
        comment="Total supply",
    )
    sold: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_SOLD,
        server_default=str(DEFAULT_SOLD),
        comment="Units sold",
    )

    # ===================
    # Timestamps
    # ===================
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        index=True,
        comment="Creation timestamp",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        comment="Last admin edit timestamp",
    )

    @property
    def info(self) -> dict[str, str]:
        return {slot: getattr(self, column) for slot, column in INFO_SLOTS.items()}

    def __repr__(self) -> str:
        return f"<Asset(short_id={self.short_id}, name={self.name})>"
