"""annotation_tables

Add published_records, annotation_fields, annotation_templates,
annotation_template_fields and annotations tables.

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # PUBLISHED RECORDS
    op.create_table(
        "published_records",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("uri", sa.String(), nullable=False),
        sa.Column("cid", sa.String(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("uri", "cid", name="uq_published_record_uri_cid"),
    )
    op.create_index("idx_published_records_uri", "published_records", ["uri"])

    # ANNOTATION FIELDS
    op.create_table(
        "annotation_fields",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("curator_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("definition_type", sa.String(32), nullable=False),
        sa.Column("definition", sa.JSON(), nullable=False),
        sa.Column("published_record_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["published_record_id"], ["published_records.id"]),
    )
    op.create_index("idx_annotation_fields_curator_id", "annotation_fields", ["curator_id"])

    # ANNOTATION TEMPLATES
    op.create_table(
        "annotation_templates",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("curator_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("published_record_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["published_record_id"], ["published_records.id"]),
    )
    op.create_index(
        "idx_annotation_templates_curator_id", "annotation_templates", ["curator_id"]
    )

    # TEMPLATE <-> FIELD
    op.create_table(
        "annotation_template_fields",
        sa.Column("template_id", sa.String(), nullable=False),
        sa.Column("field_id", sa.String(), nullable=False),
        sa.Column("required", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("template_id", "field_id"),
        sa.ForeignKeyConstraint(
            ["template_id"],
            ["annotation_templates.id"],
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(["field_id"], ["annotation_fields.id"]),
    )

    # ANNOTATIONS
    op.create_table(
        "annotations",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("curator_id", sa.String(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("annotation_field_id", sa.String(), nullable=False),
        sa.Column("value_type", sa.String(32), nullable=False),
        sa.Column("value", sa.JSON(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("template_ids", sa.JSON(), nullable=False),
        sa.Column("published_record_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["annotation_field_id"], ["annotation_fields.id"]),
        sa.ForeignKeyConstraint(["published_record_id"], ["published_records.id"]),
    )
    op.create_index("idx_annotations_curator_id", "annotations", ["curator_id"])
    op.create_index("idx_annotations_url", "annotations", ["url"])
    op.create_index(
        "idx_annotations_published_record_id", "annotations", ["published_record_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_annotations_published_record_id", table_name="annotations")
    op.drop_index("idx_annotations_url", table_name="annotations")
    op.drop_index("idx_annotations_curator_id", table_name="annotations")
    op.drop_table("annotations")
    op.drop_table("annotation_template_fields")
    op.drop_index("idx_annotation_templates_curator_id", table_name="annotation_templates")
    op.drop_table("annotation_templates")
    op.drop_index("idx_annotation_fields_curator_id", table_name="annotation_fields")
    op.drop_table("annotation_fields")
    op.drop_index("idx_published_records_uri", table_name="published_records")
    op.drop_table("published_records")
