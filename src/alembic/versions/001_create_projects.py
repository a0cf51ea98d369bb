"""Create projects table

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("description1", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=True),
        sa.Column("description2", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=True),
        sa.Column("project_type", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("project_area", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column(
            "project_location", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False
        ),
        sa.Column("main_image", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("other_images", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_created_at", "projects", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_projects_created_at", table_name="projects")
    op.drop_table("projects")
