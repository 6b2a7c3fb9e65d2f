"""create petition schema

Revision ID: 5f2c8e1a9b3d
Revises:
Create Date: 2026-10-19 09:12:04.118532

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5f2c8e1a9b3d"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Kept inline so the migration does not change when the model module does
CATEGORIES = [
    "Wildlife",
    "Environmental Causes",
    "Animal Rights",
    "Health and Wellness",
    "Education",
    "Human Rights",
    "Technology and Innovation",
    "Arts and Culture",
    "Community Development",
    "Economic Empowerment",
    "Science and Research",
    "Sports and Recreation",
]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=256), nullable=False),
        sa.Column("first_name", sa.String(length=64), nullable=False),
        sa.Column("last_name", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("auth_token", sa.String(length=512), nullable=True),
        sa.Column("image_filename", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_auth_token"), "users", ["auth_token"], unique=True)

    categories = op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_categories_id"), "categories", ["id"], unique=False)

    op.create_table(
        "petitions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("image_filename", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("title"),
    )
    op.create_index(op.f("ix_petitions_id"), "petitions", ["id"], unique=False)
    op.create_index(op.f("ix_petitions_category_id"), "petitions", ["category_id"], unique=False)
    op.create_index(op.f("ix_petitions_owner_id"), "petitions", ["owner_id"], unique=False)

    op.create_table(
        "support_tiers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("petition_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=128), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("cost", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["petition_id"], ["petitions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("petition_id", "title", name="uq_support_tier_title"),
    )
    op.create_index(op.f("ix_support_tiers_id"), "support_tiers", ["id"], unique=False)
    op.create_index(
        op.f("ix_support_tiers_petition_id"), "support_tiers", ["petition_id"], unique=False
    )

    op.create_table(
        "supporters",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("petition_id", sa.Integer(), nullable=False),
        sa.Column("support_tier_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("message", sa.String(length=512), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["petition_id"], ["petitions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["support_tier_id"], ["support_tiers.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "support_tier_id", name="uq_supporter_user_tier"),
    )
    op.create_index(op.f("ix_supporters_id"), "supporters", ["id"], unique=False)
    op.create_index(op.f("ix_supporters_petition_id"), "supporters", ["petition_id"], unique=False)
    op.create_index(
        op.f("ix_supporters_support_tier_id"), "supporters", ["support_tier_id"], unique=False
    )
    op.create_index(op.f("ix_supporters_user_id"), "supporters", ["user_id"], unique=False)

    op.bulk_insert(categories, [{"name": name} for name in CATEGORIES])


def downgrade() -> None:
    op.drop_table("supporters")
    op.drop_table("support_tiers")
    op.drop_table("petitions")
    op.drop_table("categories")
    op.drop_table("users")
