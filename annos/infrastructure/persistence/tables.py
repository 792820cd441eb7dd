"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.types import JSON

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PUBLISHED RECORDS TABLE (ledger coordinates)
# ============================================================================
published_records_table = Table(
    "published_records",
    metadata,
    Column("id", String, primary_key=True),
    Column("uri", String, nullable=False),
    Column("cid", String, nullable=False),
    Column("recorded_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("uri", "cid", name="uq_published_record_uri_cid"),
)

Index("idx_published_records_uri", published_records_table.c.uri)


# ============================================================================
# ANNOTATION FIELDS TABLE
# ============================================================================
annotation_fields_table = Table(
    "annotation_fields",
    metadata,
    Column("id", String, primary_key=True),
    Column("curator_id", String, nullable=False),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column("definition_type", String(32), nullable=False),  # AnnotationType as string
    Column("definition", JSON, nullable=False),
    Column(
        "published_record_id",
        String,
        ForeignKey("published_records.id"),
        nullable=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_annotation_fields_curator_id", annotation_fields_table.c.curator_id)


# ============================================================================
# ANNOTATION TEMPLATES TABLE
# ============================================================================
annotation_templates_table = Table(
    "annotation_templates",
    metadata,
    Column("id", String, primary_key=True),
    Column("curator_id", String, nullable=False),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column(
        "published_record_id",
        String,
        ForeignKey("published_records.id"),
        nullable=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_annotation_templates_curator_id", annotation_templates_table.c.curator_id)


# ============================================================================
# TEMPLATE <-> FIELD JUNCTION TABLE
# ============================================================================
annotation_template_fields_table = Table(
    "annotation_template_fields",
    metadata,
    Column(
        "template_id",
        String,
        ForeignKey("annotation_templates.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("field_id", String, ForeignKey("annotation_fields.id"), nullable=False),
    Column("required", Boolean, nullable=False, default=False),
    Column("position", Integer, nullable=False),
    PrimaryKeyConstraint("template_id", "field_id"),
)


# ============================================================================
# ANNOTATIONS TABLE
# ============================================================================
annotations_table = Table(
    "annotations",
    metadata,
    Column("id", String, primary_key=True),
    Column("curator_id", String, nullable=False),
    Column("url", Text, nullable=False),
    Column("annotation_field_id", String, ForeignKey("annotation_fields.id"), nullable=False),
    Column("value_type", String(32), nullable=False),
    Column("value", JSON, nullable=False),
    Column("note", Text, nullable=True),
    Column("template_ids", JSON, nullable=False),
    Column(
        "published_record_id",
        String,
        ForeignKey("published_records.id"),
        nullable=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_annotations_curator_id", annotations_table.c.curator_id)
Index("idx_annotations_url", annotations_table.c.url)
Index("idx_annotations_published_record_id", annotations_table.c.published_record_id)
