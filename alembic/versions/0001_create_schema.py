from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "0001_create_schema"
down_revision = None
branch_labels = None
depends_on = None


def _json_type():
    return postgresql.JSONB().with_variant(sa.JSON(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "media",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("data", sa.LargeBinary(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("name_en", sa.String(), nullable=False, server_default=""),
        sa.Column("name_ku", sa.String(), nullable=True),
        sa.Column("name_ar", sa.String(), nullable=True),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("google_maps_url", sa.Text(), nullable=True),
        sa.Column("brand_colors", _json_type(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_restaurants_slug", "restaurants", ["slug"], unique=True)

    op.create_table(
        "themes",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("app_bg", sa.String(64), nullable=False, server_default="#400810"),
        sa.Column(
            "background_image_media_id",
            sa.String(32),
            sa.ForeignKey("media.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "ui_settings",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("section_title_size", sa.Integer(), nullable=False, server_default="22"),
        sa.Column("category_title_size", sa.Integer(), nullable=False, server_default="18"),
        sa.Column("item_name_size", sa.Integer(), nullable=False, server_default="16"),
        sa.Column("item_description_size", sa.Integer(), nullable=False, server_default="14"),
        sa.Column("item_price_size", sa.Integer(), nullable=False, server_default="16"),
        sa.Column("header_logo_size", sa.Integer(), nullable=False, server_default="32"),
        sa.Column("bottom_nav_section_size", sa.Integer(), nullable=False, server_default="18"),
        sa.Column("bottom_nav_category_size", sa.Integer(), nullable=False, server_default="15"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "admin_users",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("pin_hash", sa.String(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("admin_users")
    op.drop_table("ui_settings")
    op.drop_table("themes")
    op.drop_index("ix_restaurants_slug", table_name="restaurants")
    op.drop_table("restaurants")
    op.drop_table("media")
