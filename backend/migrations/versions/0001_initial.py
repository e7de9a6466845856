"""Initial schema – users, vacation and followers

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18

Creates the three tables with the unique keys the handlers rely on:
users.email and followers(user_id, vacation_id).
"""

from alembic import op
import sqlalchemy as sa

# Alembic revision identifiers
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # -- users ----------------------------------------------------------
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # -- vacation -------------------------------------------------------
    op.create_table(
        "vacation",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("image", sa.String(255), nullable=False),
        # 1 = active, 0 = soft-deleted
        sa.Column("status", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_vacation_status", "vacation", ["status"])

    # -- followers ------------------------------------------------------
    op.create_table(
        "followers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("vacation_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.UniqueConstraint("user_id", "vacation_id", name="uq_followers_user_vacation"),
    )
    op.create_index("ix_followers_user_id", "followers", ["user_id"])
    op.create_index("ix_followers_vacation_id", "followers", ["vacation_id"])


def downgrade() -> None:
    op.drop_index("ix_followers_vacation_id", table_name="followers")
    op.drop_index("ix_followers_user_id", table_name="followers")
    op.drop_table("followers")
    op.drop_index("ix_vacation_status", table_name="vacation")
    op.drop_table("vacation")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
