"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Locations: one row per district, city and province denormalized
    op.create_table(
        "locations",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("province_code", sa.String(10), nullable=False),
        sa.Column("province_name", sa.String(100), nullable=False),
        sa.Column("city_code", sa.String(10), nullable=False),
        sa.Column("city_name", sa.String(100), nullable=False),
        sa.Column("city_type", sa.String(20), server_default="KOTA"),
        sa.Column("district_code", sa.String(16), nullable=False, unique=True),
        sa.Column("district_name", sa.String(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_locations_province_code", "locations", ["province_code"])
    op.create_index("ix_locations_city_code", "locations", ["city_code"])

    # Trending and smart suggestion terms
    op.create_table(
        "suggestion_terms",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("term", sa.String(255), nullable=False, unique=True),
        sa.Column("frequency", sa.Integer(), server_default="1"),
        sa.Column("source", sa.String(20), server_default="trending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_suggestion_terms_source", "suggestion_terms", ["source"])


def downgrade() -> None:
    op.drop_table("suggestion_terms")
    op.drop_table("locations")
