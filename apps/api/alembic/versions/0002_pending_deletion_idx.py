"""one pending deletion request per product

Revision ID: 0002_pending_deletion_idx
Revises: 0001_catalog_and_moderation
Create Date: 2026-10-14 16:20:00
"""

import sqlalchemy as sa
from alembic import op

revision = "0002_pending_deletion_idx"
down_revision = "0001_catalog_and_moderation"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_index(
        "uq_deletion_requests_pending_product",
        "deletion_requests",
        ["product_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
        if_not_exists=True,
    )
    op.create_index(
        "ix_products_created_at",
        "products",
        ["created_at"],
        if_not_exists=True,
    )


def downgrade() -> None:
    op.drop_index("ix_products_created_at", table_name="products", if_exists=True)
    op.drop_index(
        "uq_deletion_requests_pending_product",
        table_name="deletion_requests",
        if_exists=True,
    )
