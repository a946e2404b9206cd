"""Initial migration - marketplace read-side tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "marketing_plans",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("features", sa.JSON(), nullable=False, server_default="[]"),
    )

    op.create_table(
        "sellers",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("shop_id", sa.String(64), nullable=False, server_default="", index=True),
        sa.Column("shop_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("slug", sa.String(255), nullable=False, server_default="", index=True),
        # Defaults inherited by products
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("lead_time", sa.String(100), nullable=False, server_default=""),
        sa.Column("moq", sa.Integer(), nullable=True),
        # Trust and suspension
        sa.Column(
            "verification_status", sa.String(32), nullable=False, server_default="Unsubmitted"
        ),
        sa.Column("is_suspended", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("suspension_reason", sa.Text(), nullable=False, server_default=""),
        sa.Column("suspension_prohibitions", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("public_disclaimer", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_demoted", sa.Boolean(), nullable=False, server_default=sa.false()),
        # Marketing
        sa.Column(
            "marketing_plan_id",
            sa.String(64),
            sa.ForeignKey("marketing_plans.id"),
            nullable=True,
        ),
        sa.Column("plan_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("search_keywords", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column(
            "seller_id", sa.String(128), sa.ForeignKey("sellers.id"), nullable=True, index=True
        ),
        sa.Column("name", sa.String(500), nullable=False, server_default=""),
        sa.Column("slug", sa.String(255), nullable=False, server_default="", index=True),
        sa.Column("category", sa.String(100), nullable=False, server_default="", index=True),
        sa.Column("image_url", sa.String(1000), nullable=False, server_default=""),
        # published, draft, archived
        sa.Column("status", sa.String(20), nullable=False, server_default="draft", index=True),
        sa.Column("variants", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("moq", sa.Integer(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("review_count", sa.Integer(), nullable=True),
        sa.Column("search_keywords", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("list_on_direct", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_demoted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )

    op.create_table(
        "ad_slots",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("entity_type", sa.String(16), nullable=False, server_default="product"),
        sa.Column("pinned_entities", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "follows",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("viewer_id", sa.String(128), nullable=False, index=True),
        sa.Column("seller_id", sa.String(128), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint("viewer_id", "seller_id"),
    )

    op.create_table(
        "wishlist_items",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("viewer_id", sa.String(128), nullable=False, index=True),
        sa.Column("product_id", sa.String(128), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint("viewer_id", "product_id"),
    )

    op.create_table(
        "reports",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("report_type", sa.String(32), nullable=False, server_default="Product"),
        sa.Column("reference_id", sa.String(128), nullable=False, index=True),
        sa.Column("reason", sa.String(255), nullable=False, server_default=""),
        sa.Column("details", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(32), nullable=False, server_default="Open", index=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.String(100), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("image_url", sa.String(1000), nullable=False, server_default=""),
    )


def downgrade() -> None:
    op.drop_table("categories")
    op.drop_table("reports")
    op.drop_table("wishlist_items")
    op.drop_table("follows")
    op.drop_table("ad_slots")
    op.drop_table("products")
    op.drop_table("sellers")
    op.drop_table("marketing_plans")
