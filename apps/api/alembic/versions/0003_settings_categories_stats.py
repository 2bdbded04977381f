"""store settings, categories and listing stats

Revision ID: 0003_settings_categories_stats
Revises: 0002_pending_deletion_idx
Create Date: 2026-10-19 10:30:00
"""

import sqlalchemy as sa
from alembic import op

revision = "0003_settings_categories_stats"
down_revision = "0002_pending_deletion_idx"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "store_settings",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("store_name", sa.String(length=200), nullable=False),
        sa.Column("contact_phone", sa.String(length=40), nullable=False),
        sa.Column("store_description", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_store_settings"),
    )
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )
    op.add_column(
        "products",
        sa.Column("views", sa.Integer(), server_default=sa.text("0"), nullable=False),
    )
    op.add_column(
        "products",
        sa.Column("clicks", sa.Integer(), server_default=sa.text("0"), nullable=False),
    )
    op.create_table(
        "product_interactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(length=10), nullable=False),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["product_id"],
            ["products.id"],
            name="fk_product_interactions_product_id_products",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_product_interactions"),
        sa.UniqueConstraint(
            "product_id",
            "kind",
            "ip_address",
            name="uq_product_interactions_product_kind_ip",
        ),
    )
    op.create_index(
        "ix_product_interactions_product_id", "product_interactions", ["product_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_product_interactions_product_id", table_name="product_interactions")
    op.drop_table("product_interactions")
    op.drop_column("products", "clicks")
    op.drop_column("products", "views")
    op.drop_table("categories")
    op.drop_table("store_settings")
