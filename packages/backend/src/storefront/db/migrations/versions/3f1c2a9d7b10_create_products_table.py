"""Create products table

Learn: Mirrors the table the app creates on startup when
STOREFRONT_AUTO_CREATE_SCHEMA is on. Deployments that manage the schema
with Alembic turn that flag off and run `alembic upgrade head` instead.

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:41.517203
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=True),
        sa.Column("categories", postgresql.ARRAY(sa.Text()), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("products")
