"""Initial schema — users, ports, boats, categories, requests, unread counters.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("e_mail", sa.String(255), unique=True, nullable=False),
        sa.Column("profile", sa.String(30), nullable=False),
    )
    op.create_index("idx_users_profile", "users", ["profile"])

    op.create_table(
        "ports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), unique=True, nullable=False),
    )

    op.create_table(
        "user_ports",
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "port_id", sa.Integer, sa.ForeignKey("ports.id", ondelete="CASCADE"), primary_key=True
        ),
    )
    op.create_index("idx_user_ports_port", "user_ports", ["port_id"])

    op.create_table(
        "boats",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("id_user", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("id_port", sa.Integer, sa.ForeignKey("ports.id"), nullable=True),
    )
    op.create_index("idx_boats_user", "boats", ["id_user"])

    op.create_table(
        "service_categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("label", sa.String(100), unique=True, nullable=False),
    )

    op.create_table(
        "user_service_categories",
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "service_category_id",
            sa.Integer,
            sa.ForeignKey("service_categories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "service_requests",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id_client", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("id_boat", sa.Integer, sa.ForeignKey("boats.id"), nullable=True),
        sa.Column(
            "id_service", sa.Integer, sa.ForeignKey("service_categories.id"), nullable=False
        ),
        sa.Column("id_boat_manager", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("urgency", sa.String(20), nullable=False, server_default="normal"),
        sa.Column("status", sa.String(30), nullable=False, server_default="submitted"),
        sa.Column("date", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "idx_requests_client_manager", "service_requests", ["id_client", "id_boat_manager"]
    )
    op.create_index("idx_requests_status", "service_requests", ["status"])

    op.create_table(
        "user_conversation_unreads",
        sa.Column(
            "user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("conversation_id", sa.Integer, primary_key=True),
        sa.Column("unread_count", sa.Integer, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("user_conversation_unreads")
    op.drop_index("idx_requests_status", table_name="service_requests")
    op.drop_index("idx_requests_client_manager", table_name="service_requests")
    op.drop_table("service_requests")
    op.drop_table("user_service_categories")
    op.drop_table("service_categories")
    op.drop_index("idx_boats_user", table_name="boats")
    op.drop_table("boats")
    op.drop_index("idx_user_ports_port", table_name="user_ports")
    op.drop_table("user_ports")
    op.drop_table("ports")
    op.drop_index("idx_users_profile", table_name="users")
    op.drop_table("users")
