"""Relational record store backed by SQLAlchemy (SQLite by default)."""

import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import Date, ForeignKey, Integer, LargeBinary, String, Text, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from .calculations import parse_date
from .record import MaintenanceRecord

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class CategoryRow(Base):
    """A known maintenance category."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)


class RecordRow(Base):
    """A stored maintenance record, PDF bytes included."""

    __tablename__ = "records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category: Mapped[str] = mapped_column(
        String(255), ForeignKey("categories.name"), nullable=False, index=True
    )
    service_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pdf: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    pdf_data: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)

    def to_record(self) -> MaintenanceRecord:
        return MaintenanceRecord(
            category=self.category,
            date=self.service_date.isoformat(),
            company=self.company,
            type=self.type,
            notes=self.notes,
            pdf_name=self.pdf,
            record_id=self.id,
        )


class SqlRecordStore:
    """
    Records kept in two tables: categories (the category universe) and
    records. A record's id is its primary key; ids grow in insertion order,
    which breaks ties between records sharing a date.
    """

    def __init__(self, url: str = "sqlite://"):
        self.engine = create_engine(url)
        Base.metadata.create_all(self.engine)

    def list_categories(self) -> List[str]:
        with Session(self.engine) as session:
            return list(session.scalars(select(CategoryRow.name).order_by(CategoryRow.name)))

    def ensure_category(self, name: str) -> None:
        with Session(self.engine) as session:
            if session.get(CategoryRow, name) is None:
                session.add(CategoryRow(name=name))
                session.commit()

    def records_for(self, category: str) -> List[MaintenanceRecord]:
        """Records ascending by date; records sharing a date keep insertion order."""
        stmt = (
            select(RecordRow)
            .where(RecordRow.category == category)
            .order_by(RecordRow.service_date, RecordRow.id)
        )
        with Session(self.engine) as session:
            records = [row.to_record() for row in session.scalars(stmt)]
        logger.debug("Loaded %d records for %s", len(records), category)
        return records

    def add_record(self, record: MaintenanceRecord) -> MaintenanceRecord:
        """
        Insert a record, creating its category row if needed.

        Raises ValueError if the record date cannot be parsed.
        """
        when = parse_date(record.date)
        if when is None:
            raise ValueError(f"Invalid record date: {record.date!r}")

        self.ensure_category(record.category)
        has_pdf = bool(record.pdf_name) and record.pdf_data is not None
        row = RecordRow(
            category=record.category,
            service_date=when.date(),
            company=record.company,
            type=record.type,
            notes=record.notes,
            pdf=record.pdf_name if has_pdf else None,
            pdf_data=record.pdf_data if has_pdf else None,
        )
        with Session(self.engine) as session:
            session.add(row)
            session.commit()
            stored = row.to_record()
        logger.info("Stored record %d for %s", stored.record_id, record.category)
        return stored

    def get_pdf(self, category: str, record_id: int) -> Optional[Tuple[str, bytes]]:
        with Session(self.engine) as session:
            row = session.get(RecordRow, record_id)
            if row is None or row.category != category or row.pdf_data is None:
                return None
            return row.pdf, row.pdf_data
