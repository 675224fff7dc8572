"""Create assets table

Adds:
- assets: one row per uploaded 3D model, unique short_id
- CHECK constraints keeping views, likes, qty and sold non-negative

Revision ID: 001
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "assets",
        # --- Identity ---
        sa.Column("id", sa.String(36), primary_key=True, comment="Internal identifier"),
        sa.Column("short_id", sa.String(21), nullable=False, comment="Public share identifier"),
        # --- Content ---
        sa.Column("name", sa.String(255), nullable=False, comment="Display name"),
        sa.Column("model_url", sa.String(1000), nullable=False, comment="Public URL of the 3D model file"),
        sa.Column("model_key", sa.String(500), nullable=False, server_default="", comment="Object storage key of the model file"),
        sa.Column("background_url", sa.String(1000), nullable=False, server_default="", comment="Public URL of the background image, empty if none"),
        sa.Column("background_key", sa.String(500), nullable=False, server_default="", comment="Object storage key of the background image"),
        # --- Display annotations ---
        sa.Column("info_top_left", sa.String(500), nullable=False, server_default=""),
        sa.Column("info_top_right", sa.String(500), nullable=False, server_default=""),
        sa.Column("info_bottom_left", sa.String(500), nullable=False, server_default=""),
        sa.Column("info_bottom_right", sa.String(500), nullable=False, server_default=""),
        # --- Counters ---
        sa.Column("views", sa.Integer(), nullable=False, server_default="0", comment="Successful fetches by short identifier"),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0", comment="Net likes, floored at zero"),
        sa.Column("qty", sa.Integer(), nullable=False, server_default="100", comment="Total supply"),
        sa.Column("sold", sa.Integer(), nullable=False, server_default="0", comment="Units sold"),
        # --- Timestamps ---
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), comment="Creation timestamp"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), comment="Last admin edit timestamp"),
        sa.CheckConstraint("views >= 0", name="ck_assets_views_non_negative"),
        sa.CheckConstraint("likes >= 0", name="ck_assets_likes_non_negative"),
        sa.CheckConstraint("qty >= 0", name="ck_assets_qty_non_negative"),
        sa.CheckConstraint("sold >= 0", name="ck_assets_sold_non_negative"),
        sa.CheckConstraint("model_url <> ''", name="ck_assets_model_url_not_empty"),
    )
    op.create_index("ix_assets_short_id", "assets", ["short_id"], unique=True)
    op.create_index("ix_assets_created_at", "assets", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_assets_created_at", table_name="assets")
    op.drop_index("ix_assets_short_id", table_name="assets")
    op.drop_table("assets")
