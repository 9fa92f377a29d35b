"""landing content: businesses, pages, sections, preview tokens, products

Revision ID: 5b1e0c7d2a41
Revises:
Create Date: 2026-10-19 10:12:03.418220

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5b1e0c7d2a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONTENT_STATUSES = ("published", "dirty", "draft")
JSONType = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def _status(name: str) -> sa.Enum:
    # el CHECK va aparte con el nombre de la convención (ck_<tabla>_<enum>)
    return sa.Enum(*CONTENT_STATUSES, name=name, native_enum=False, create_constraint=False)


def _status_check(table: str, name: str) -> sa.CheckConstraint:
    allowed = ", ".join(f"'{s}'" for s in CONTENT_STATUSES)
    return sa.CheckConstraint(f"status IN ({allowed})", name=f"ck_{table}_{name}")


def upgrade() -> None:
    # nombres explícitos, iguales a los que genera NAMING_CONVENTION en landing.db.base
    op.create_table(
        "businesses",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("slug", sa.String(length=80), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_businesses"),
    )
    op.create_index("ix_businesses_slug", "businesses", ["slug"], unique=True)

    op.create_table(
        "retail_products",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("business_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("benefits", JSONType, nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_retail_products"),
        sa.ForeignKeyConstraint(
            ["business_id"], ["businesses.id"],
            name="fk_retail_products_business_id_businesses", ondelete="CASCADE",
        ),
    )
    op.create_index("ix_retail_products_business_id", "retail_products", ["business_id"])
    op.create_index("ix_retail_products_business_status", "retail_products", ["business_id", "status"])

    op.create_table(
        "pages",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("org_id", sa.String(length=36), nullable=False),
        sa.Column("slug", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("template", sa.String(length=64), nullable=True),
        sa.Column("status", _status("page_status"), nullable=False, server_default="draft"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_pages"),
        sa.ForeignKeyConstraint(
            ["org_id"], ["businesses.id"],
            name="fk_pages_org_id_businesses", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("org_id", "slug", name="uq_page_org_slug"),
        _status_check("pages", "page_status"),
    )
    op.create_index("ix_pages_org_id", "pages", ["org_id"])

    op.create_table(
        "page_sections",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("page_id", sa.String(length=36), nullable=False),
        sa.Column("org_id", sa.String(length=36), nullable=False),
        sa.Column("key", sa.String(length=64), nullable=False),
        sa.Column("label", sa.String(length=160), nullable=False, server_default=""),
        sa.Column("component", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("published_content", JSONType, nullable=True),
        sa.Column("draft_content", JSONType, nullable=True),
        sa.Column("status", _status("section_status"), nullable=False, server_default="draft"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_page_sections"),
        sa.ForeignKeyConstraint(
            ["page_id"], ["pages.id"],
            name="fk_page_sections_page_id_pages", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["org_id"], ["businesses.id"],
            name="fk_page_sections_org_id_businesses", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("page_id", "key", name="uq_page_section_key"),
        _status_check("page_sections", "section_status"),
    )
    op.create_index("ix_page_sections_page_id", "page_sections", ["page_id"])
    op.create_index("ix_page_sections_org_id", "page_sections", ["org_id"])
    op.create_index("ix_page_sections_page_position", "page_sections", ["page_id", "position"])

    op.create_table(
        "preview_tokens",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("org_id", sa.String(length=36), nullable=False),
        sa.Column("page_id", sa.String(length=36), nullable=True),
        sa.Column("section_id", sa.String(length=36), nullable=True),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_preview_tokens"),
        sa.ForeignKeyConstraint(
            ["org_id"], ["businesses.id"],
            name="fk_preview_tokens_org_id_businesses", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["page_id"], ["pages.id"],
            name="fk_preview_tokens_page_id_pages", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["section_id"], ["page_sections.id"],
            name="fk_preview_tokens_section_id_page_sections", ondelete="CASCADE",
        ),
    )
    op.create_index("ix_preview_tokens_org_id", "preview_tokens", ["org_id"])
    op.create_index("ix_preview_tokens_expires_at", "preview_tokens", ["expires_at"])


def downgrade() -> None:
    op.drop_index("ix_preview_tokens_expires_at", table_name="preview_tokens")
    op.drop_index("ix_preview_tokens_org_id", table_name="preview_tokens")
    op.drop_table("preview_tokens")

    op.drop_index("ix_page_sections_page_position", table_name="page_sections")
    op.drop_index("ix_page_sections_org_id", table_name="page_sections")
    op.drop_index("ix_page_sections_page_id", table_name="page_sections")
    op.drop_table("page_sections")

    op.drop_index("ix_pages_org_id", table_name="pages")
    op.drop_table("pages")

    op.drop_index("ix_retail_products_business_status", table_name="retail_products")
    op.drop_index("ix_retail_products_business_id", table_name="retail_products")
    op.drop_table("retail_products")

    op.drop_index("ix_businesses_slug", table_name="businesses")
    op.drop_table("businesses")
