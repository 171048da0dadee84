"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import date, datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nautic.adapters.persistence.database import Base

user_ports = Table(
    "user_ports",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("port_id", Integer, ForeignKey("ports.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_user_ports_port", "port_id"),
)

user_service_categories = Table(
    "user_service_categories",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "service_category_id",
        Integer,
        ForeignKey("service_categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    e_mail: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    profile: Mapped[str] = mapped_column(String(30), nullable=False)

    ports: Mapped[list["PortModel"]] = relationship(secondary=user_ports, back_populates="users")
    skills: Mapped[list["ServiceCategoryModel"]] = relationship(secondary=user_service_categories)

    __table_args__ = (Index("idx_users_profile", "profile"),)


class PortModel(Base):
    __tablename__ = "ports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)

    users: Mapped[list["UserModel"]] = relationship(secondary=user_ports, back_populates="ports")


class BoatModel(Base):
    __tablename__ = "boats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    id_user: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    id_port: Mapped[int | None] = mapped_column(Integer, ForeignKey("ports.id"), nullable=True)

    __table_args__ = (Index("idx_boats_user", "id_user"),)


class ServiceCategoryModel(Base):
    __tablename__ = "service_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class ServiceRequestModel(Base):
    __tablename__ = "service_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_client: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    id_boat: Mapped[int | None] = mapped_column(Integer, ForeignKey("boats.id"), nullable=True)
    id_service: Mapped[int] = mapped_column(
        Integer, ForeignKey("service_categories.id"), nullable=False
    )
    id_boat_manager: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    urgency: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="submitted")
    request_date: Mapped[date | None] = mapped_column("date", Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_requests_client_manager", "id_client", "id_boat_manager"),
        Index("idx_requests_status", "status"),
    )


class ConversationUnreadModel(Base):
    __tablename__ = "user_conversation_unreads"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    conversation_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    unread_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
