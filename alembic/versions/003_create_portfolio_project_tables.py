"""Create portfolio, project and project image tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "portfolio",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("tech_stack", sa.String(length=512), nullable=True),
        sa.Column("residence", sa.String(length=128), nullable=True),
        sa.Column("location", sa.String(length=128), nullable=True),
        sa.Column("telephone", sa.String(length=32), nullable=True),
        sa.Column("experience", sa.String(length=256), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("youtube_url", sa.String(length=512), nullable=True),
        sa.Column("blog_url", sa.String(length=512), nullable=True),
        sa.Column("github_id", sa.String(length=128), nullable=True),
        sa.Column("category", sa.String(length=64), nullable=True),
        sa.Column("filter", sa.String(length=64), nullable=True),
        sa.Column("portfolio_image", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_portfolio_user_id"), "portfolio", ["user_id"], unique=False)
    op.create_index(op.f("ix_portfolio_category"), "portfolio", ["category"], unique=False)
    op.create_index(op.f("ix_portfolio_filter"), "portfolio", ["filter"], unique=False)

    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("term", sa.String(length=128), nullable=True),
        sa.Column("people", sa.String(length=128), nullable=True),
        sa.Column("position", sa.String(length=128), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_project_user_id"), "project", ["user_id"], unique=False)

    op.create_table(
        "project_image",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("image_url", sa.String(length=512), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["project.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_project_image_project_id"), "project_image", ["project_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_project_image_project_id"), table_name="project_image")
    op.drop_table("project_image")
    op.drop_index(op.f("ix_project_user_id"), table_name="project")
    op.drop_table("project")
    op.drop_index(op.f("ix_portfolio_filter"), table_name="portfolio")
    op.drop_index(op.f("ix_portfolio_category"), table_name="portfolio")
    op.drop_index(op.f("ix_portfolio_user_id"), table_name="portfolio")
    op.drop_table("portfolio")
