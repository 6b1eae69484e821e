"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import date, datetime, time

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.adapters.persistence.database import Base


class SiteModel(Base):
    __tablename__ = "sites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    region: Mapped[str | None] = mapped_column(String(50), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("idx_sites_region", "region"),)


class CrewModel(Base):
    __tablename__ = "crews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    category: Mapped[str | None] = mapped_column(String(1), nullable=True)
    state: Mapped[str | None] = mapped_column(String(30), nullable=True)
    skill_1: Mapped[str | None] = mapped_column(String(100), nullable=True)
    skill_2: Mapped[str | None] = mapped_column(String(100), nullable=True)
    skill_3: Mapped[str | None] = mapped_column(String(100), nullable=True)

    route_logs: Mapped[list["CrewRouteModel"]] = relationship(back_populates="crew")

    __table_args__ = (Index("idx_crews_category", "category"),)


class TicketModel(Base):
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_source: Mapped[str | None] = mapped_column(String(100), nullable=True)
    site_id: Mapped[str | None] = mapped_column(String(50), nullable=True)  # site code
    site_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    state: Mapped[str] = mapped_column(String(30), nullable=False, default="NUEVO")
    task_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    task_subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fault_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    platform_affected: Mapped[str | None] = mapped_column(String(100), nullable=True)
    attention_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    service_affected: Mapped[str | None] = mapped_column(String(100), nullable=True)
    crew_category: Mapped[str | None] = mapped_column(String(1), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fault_occur_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    history: Mapped[list["CrewTicketStateModel"]] = relationship(back_populates="ticket")

    __table_args__ = (
        Index("idx_tickets_state", "state"),
        Index("idx_tickets_site", "site_id"),
    )


class TicketStateCatalogModel(Base):
    __tablename__ = "ticket_states_catalog"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class CrewTicketStateModel(Base):
    __tablename__ = "crew_ticket_states"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False
    )
    crew_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("crews.id"), nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(30), nullable=False)

    ticket: Mapped["TicketModel"] = relationship(back_populates="history")

    __table_args__ = (
        Index("idx_crew_ticket_states_ticket", "ticket_id"),
        Index("idx_crew_ticket_states_crew", "crew_id"),
    )


class CrewRouteModel(Base):
    __tablename__ = "crew_routes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    crew_id: Mapped[int] = mapped_column(Integer, ForeignKey("crews.id"), nullable=False)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    at: Mapped[time] = mapped_column(Time, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    crew: Mapped["CrewModel"] = relationship(back_populates="route_logs")

    __table_args__ = (Index("idx_crew_routes_crew_day", "crew_id", "day"),)
