"""content collections: faqs, testimonials, service offerings, projects

Revision ID: 8c3f61a2d7e5
Revises: 5b1e2c7d9a40
Create Date: 2026-10-17 16:40:08.771254

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '8c3f61a2d7e5'
down_revision: Union[str, Sequence[str], None] = '5b1e2c7d9a40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TS = sa.DateTime(timezone=True)


def _common_head():
    return [
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("workspace_id", sa.Integer(), sa.ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False),
    ]


def _common_tail():
    return [
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("updated_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", TS, nullable=False),
        sa.Column("updated_at", TS, nullable=False),
    ]


def upgrade():
    op.create_table(
        "faqs",
        *_common_head(),
        sa.Column("question", sa.String(length=512), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=80), nullable=True),
        *_common_tail(),
    )

    op.create_table(
        "testimonials",
        *_common_head(),
        sa.Column("quote", sa.Text(), nullable=False),
        sa.Column("author", sa.String(length=160), nullable=False),
        sa.Column("project", sa.String(length=160), nullable=True),
        sa.Column("role", sa.String(length=160), nullable=True),
        sa.Column("avatar", sa.String(length=512), nullable=True),
        *_common_tail(),
    )

    op.create_table(
        "service_offerings",
        *_common_head(),
        sa.Column("slug", sa.String(length=128), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("deliverables", sa.JSON(), nullable=True),
        sa.Column("timeline", sa.String(length=160), nullable=True),
        sa.Column("icon", sa.String(length=160), nullable=True),
        *_common_tail(),
        sa.UniqueConstraint("workspace_id", "slug", name="uq_service_offerings_workspace_slug"),
    )

    op.create_table(
        "projects",
        *_common_head(),
        sa.Column("slug", sa.String(length=128), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=160), nullable=True),
        sa.Column("year", sa.String(length=16), nullable=True),
        sa.Column("category", sa.String(length=80), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=512), nullable=True),
        sa.Column("brief", sa.Text(), nullable=True),
        sa.Column("solution", sa.Text(), nullable=True),
        sa.Column("outcome", sa.Text(), nullable=True),
        sa.Column("size", sa.String(length=80), nullable=True),
        sa.Column("stage", sa.String(length=80), nullable=True),
        sa.Column("constraints", sa.Text(), nullable=True),
        sa.Column("approach", sa.Text(), nullable=True),
        sa.Column("gallery", sa.JSON(), nullable=True),
        *_common_tail(),
        sa.UniqueConstraint("workspace_id", "slug", name="uq_projects_workspace_slug"),
    )

    for table in ("faqs", "testimonials", "service_offerings", "projects"):
        op.create_index(f"ix_{table}_workspace_id", table, ["workspace_id"])
        op.create_index(f"ix_{table}_workspace_published", table, ["workspace_id", "is_published"])


def downgrade():
    for table in ("projects", "service_offerings", "testimonials", "faqs"):
        op.drop_table(table)
