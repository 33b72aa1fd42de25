"""Add datarooms, dataroom folders and dataroom documents

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "datarooms",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("team_id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_datarooms_team_id"), "datarooms", ["team_id"], unique=False)

    op.create_table(
        "dataroom_folders",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("dataroom_id", sa.String(32), nullable=False),
        sa.Column("parent_id", sa.String(32), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("path", sa.String(1024), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["dataroom_id"], ["datarooms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["dataroom_folders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("dataroom_id", "path", name="uq_dataroom_folder_path"),
    )
    op.create_index(op.f("ix_dataroom_folders_dataroom_id"), "dataroom_folders", ["dataroom_id"], unique=False)
    op.create_index(op.f("ix_dataroom_folders_parent_id"), "dataroom_folders", ["parent_id"], unique=False)

    op.create_table(
        "dataroom_documents",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("dataroom_id", sa.String(32), nullable=False),
        sa.Column("document_id", sa.String(32), nullable=False),
        sa.Column("folder_id", sa.String(32), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["dataroom_id"], ["datarooms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["document_id"], ["documents.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["folder_id"], ["dataroom_folders.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_dataroom_documents_dataroom_id"), "dataroom_documents", ["dataroom_id"], unique=False)
    op.create_index(op.f("ix_dataroom_documents_document_id"), "dataroom_documents", ["document_id"], unique=False)
    op.create_index(op.f("ix_dataroom_documents_folder_id"), "dataroom_documents", ["folder_id"], unique=False)


def downgrade() -> None:
    op.drop_table("dataroom_documents")
    op.drop_index(op.f("ix_dataroom_folders_parent_id"), table_name="dataroom_folders")
    op.drop_index(op.f("ix_dataroom_folders_dataroom_id"), table_name="dataroom_folders")
    op.drop_table("dataroom_folders")
    op.drop_index(op.f("ix_datarooms_team_id"), table_name="datarooms")
    op.drop_table("datarooms")
