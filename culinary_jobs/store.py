"""
Database persistence for enriched jobs and their contacts.

Two tables:

- ``culinary_jobs_google``: one row per apply link (UNIQUE), upserted in place
- ``culinary_contacts_google``: one row per (job, email), deleted with its job

PostgreSQL is the production target; SQLite works for local runs and tests.
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    event,
    func,
    select,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from culinary_jobs.errors import StoreUnavailableError
from culinary_jobs.log import get_logger
from culinary_jobs.models import Contact, Job

log = get_logger(__name__)

JOBS_TABLE = "culinary_jobs_google"
CONTACTS_TABLE = "culinary_contacts_google"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


class JobRow(Base):
    """
    Model for job records.

    Unique constraint: apply_link
    """
    __tablename__ = JOBS_TABLE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    location: Mapped[str] = mapped_column(Text, nullable=True)
    posted_at: Mapped[str] = mapped_column(Text, nullable=True)
    schedule: Mapped[str] = mapped_column(Text, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=True)
    salary_min: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    salary_max: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    salary_currency: Mapped[str] = mapped_column(String(10), nullable=True)
    salary_period: Mapped[str] = mapped_column(String(20), nullable=True)
    skills: Mapped[list[str] | None] = mapped_column(
        JSON().with_variant(ARRAY(Text), "postgresql"), nullable=True
    )
    experience_level: Mapped[str] = mapped_column(String(50), nullable=True)
    apply_link: Mapped[str] = mapped_column(Text, nullable=True)
    source: Mapped[str] = mapped_column(Text, nullable=True)
    scraped_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
    company_website: Mapped[str] = mapped_column(Text, nullable=True)
    company_domain: Mapped[str] = mapped_column(Text, nullable=True)

    date_added: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (UniqueConstraint("apply_link", name="unique_job_apply_link"),)

    def __repr__(self) -> str:
        return f"<JobRow(id={self.id}, title='{self.title}', company='{self.company}')>"


class ContactRow(Base):
    """
    Model for contact records.

    Unique constraint: (job_id, email)
    """
    __tablename__ = CONTACTS_TABLE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(f"{JOBS_TABLE}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=True)
    last_name: Mapped[str] = mapped_column(Text, nullable=True)
    position: Mapped[str] = mapped_column(Text, nullable=True)
    confidence: Mapped[int] = mapped_column(Integer, nullable=True)
    company: Mapped[str] = mapped_column(Text, nullable=True)
    domain: Mapped[str] = mapped_column(Text, nullable=True)

    date_added: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (UniqueConstraint("job_id", "email", name="unique_google_contact_email"),)

    def __repr__(self) -> str:
        return f"<ContactRow(id={self.id}, job_id={self.job_id}, email='{self.email}')>"


# Refreshed on conflict. date_added is write-once.
JOB_MUTABLE_COLUMNS: tuple[str, ...] = (
    "title", "company", "location", "posted_at", "schedule", "description",
    "salary_min", "salary_max", "salary_currency", "salary_period", "skills",
    "experience_level", "source", "scraped_at", "company_website", "company_domain",
)
CONTACT_MUTABLE_COLUMNS: tuple[str, ...] = (
    "first_name", "last_name", "position", "confidence", "company", "domain",
)


def normalize_database_url(url: str) -> str:
    """Accept Heroku/Supabase style ``postgres://`` URLs."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite manages transactions itself unless told not to, which breaks
    # SAVEPOINT; foreign keys (and so ON DELETE CASCADE) are off by default.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def _job_values(job: Job) -> dict:
    return {
        "title": job.title[:255],
        "company": job.company[:255],
        "location": job.location,
        "posted_at": job.posted_at,
        "schedule": job.schedule,
        "description": job.description,
        "salary_min": job.salary_min,
        "salary_max": job.salary_max,
        "salary_currency": job.salary_currency,
        "salary_period": job.salary_period.value,
        "skills": list(job.skills),
        "experience_level": job.experience_level.value,
        "apply_link": job.apply_link,
        "source": job.source,
        "scraped_at": job.scraped_at,
        "company_website": job.company_website,
        "company_domain": job.company_domain,
    }


def _contact_values(contact: Contact, job: Job) -> dict:
    return {
        "email": contact.email,
        "first_name": contact.first_name,
        "last_name": contact.last_name,
        "position": contact.position,
        "confidence": contact.confidence,
        "company": contact.company or job.company,
        "domain": contact.domain or job.company_domain,
    }


class PersistenceStore:
    """Explicitly opened database handle shared by all queries of a run.

    ``deduplicate=True`` updates an existing row when an apply link is seen
    again; ``False`` leaves the existing row untouched and skips the job.
    """

    def __init__(self, database_url: str, *, deduplicate: bool = True) -> None:
        self.database_url = normalize_database_url(database_url or "")
        self.deduplicate = deduplicate
        self.engine: Engine | None = None
        self._sessions: sessionmaker | None = None

    def __enter__(self) -> "PersistenceStore":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self) -> "PersistenceStore":
        if self.is_open:
            return self
        if not self.database_url:
            raise StoreUnavailableError("No DATABASE_URL configured")

        log.info("Connecting to database %s...", self.database_url.split("@")[-1][:60])
        try:
            engine = create_engine(self.database_url, pool_pre_ping=True, pool_recycle=3600)
            if engine.dialect.name == "sqlite":
                _enable_sqlite_savepoints(engine)
            elif engine.dialect.name != "postgresql":
                raise StoreUnavailableError(f"Unsupported database dialect: {engine.dialect.name}")
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(engine)
        except (SQLAlchemyError, ImportError) as exc:
            raise StoreUnavailableError(f"Failed to connect to database: {exc}") from exc

        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)
        log.info("Database ready (tables %s, %s)", JOBS_TABLE, CONTACTS_TABLE)
        return self

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            log.debug("Database connection pool disposed")
        self.engine = None
        self._sessions = None

    def _session(self) -> Session:
        if self._sessions is None:
            raise StoreUnavailableError("Store is not open")
        return self._sessions()

    def _insert(self, model):
        if self.engine.dialect.name == "postgresql":
            return pg_insert(model)
        return sqlite_insert(model)

    def _upsert_job(self, session: Session, job: Job, now: datetime) -> int | None:
        stmt = self._insert(JobRow).values(**_job_values(job), date_added=now, last_updated=now)
        if self.deduplicate:
            stmt = stmt.on_conflict_do_update(
                index_elements=[JobRow.apply_link],
                set_={
                    **{col: getattr(stmt.excluded, col) for col in JOB_MUTABLE_COLUMNS},
                    "last_updated": now,
                },
            )
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=[JobRow.apply_link])
        return session.execute(stmt.returning(JobRow.id)).scalar_one_or_none()

    def _upsert_contacts(self, session: Session, job_id: int, job: Job, now: datetime) -> int:
        written = 0
        for contact in job.contacts:
            stmt = self._insert(ContactRow).values(
                job_id=job_id, **_contact_values(contact, job), date_added=now, last_updated=now
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[ContactRow.job_id, ContactRow.email],
                set_={
                    **{col: getattr(stmt.excluded, col) for col in CONTACT_MUTABLE_COLUMNS},
                    "last_updated": now,
                },
            )
            session.execute(stmt)
            written += 1
        return written

    def upsert_jobs(self, jobs: Iterable[Job]) -> int:
        """Write ``jobs`` in one transaction; returns the number written.

        Each job gets its own SAVEPOINT, so a failing job is rolled back and
        skipped while the rest of the batch still commits.
        """
        jobs = list(jobs)
        if not jobs:
            return 0

        inserted = skipped = failed = 0
        log.info("Upserting %d jobs into %s...", len(jobs), JOBS_TABLE)
        try:
            with self._session() as session, session.begin():
                for job in jobs:
                    now = _utcnow()
                    try:
                        with session.begin_nested():
                            job_id = self._upsert_job(session, job, now)
                            if job_id is None:
                                skipped += 1
                                log.debug("Skipped existing job %s", job.apply_link)
                                continue
                            n_contacts = self._upsert_contacts(session, job_id, job, now)
                    except SQLAlchemyError as exc:
                        failed += 1
                        log.error("Error inserting job %r at %r: %s", job.title, job.company, exc)
                        continue
                    inserted += 1
                    log.debug(
                        "Upserted job %r at %r (ID: %d, %d contacts)",
                        job.title, job.company, job_id, n_contacts,
                    )
        except SQLAlchemyError as exc:
            log.error("Transaction failed, rolled back %d jobs: %s", inserted, exc)
            return 0

        log.info(
            "Committed %d jobs (%d skipped as duplicates, %d failed)",
            inserted, skipped, failed,
        )
        return inserted

    def count_jobs(self) -> int:
        with self._session() as session:
            return session.scalar(select(func.count()).select_from(JobRow)) or 0

    def get_job(self, apply_link: str) -> JobRow | None:
        with self._session() as session:
            return session.scalars(
                select(JobRow).where(JobRow.apply_link == apply_link)
            ).one_or_none()

    def get_contacts(self, job_id: int) -> list[ContactRow]:
        with self._session() as session:
            return list(session.scalars(
                select(ContactRow).where(ContactRow.job_id == job_id).order_by(ContactRow.id)
            ))
