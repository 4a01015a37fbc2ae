# portfolio_api/database/contact_store.py

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from portfolio_api.core.config import Settings
from portfolio_api.database.database import Base, build_engine, build_session_factory
from portfolio_api.models.contacts import Contact
from portfolio_api.schemas.contacts import ContactCreate, ContactSubmission

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the backing store cannot read or write submissions"""
    pass


class ContactStore(ABC):
    """Storage for accepted contact submissions. Records are never updated or deleted."""

    @abstractmethod
    def create(self, data: ContactCreate) -> ContactSubmission:
        """Assign an id and creation time, store the record and return it."""

    @abstractmethod
    def list_all(self) -> List[ContactSubmission]:
        """Return every stored record."""


class InMemoryContactStore(ContactStore):
    """Process-lifetime store, records kept in insertion order"""

    def __init__(self):
        self._records: List[ContactSubmission] = []
        self._ids = set()
        self._lock = threading.Lock()

    def create(self, data: ContactCreate) -> ContactSubmission:
        with self._lock:
            record_id = str(uuid.uuid4())
            while record_id in self._ids:
                record_id = str(uuid.uuid4())
            record = ContactSubmission(
                id=record_id,
                created_at=datetime.now(timezone.utc),
                **data.model_dump(),
            )
            self._records.append(record)
            self._ids.add(record_id)
        return record

    def list_all(self) -> List[ContactSubmission]:
        with self._lock:
            return list(self._records)


class SqlContactStore(ContactStore):
    """Relational store backed by the ``contacts`` table"""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, data: ContactCreate) -> ContactSubmission:
        try:
            with self._session_factory() as db:
                contact = Contact(
                    id=str(uuid.uuid4()),
                    created_at=datetime.now(timezone.utc),
                    **data.model_dump(),
                )
                db.add(contact)
                db.commit()
                return ContactSubmission.model_validate(contact)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store contact submission: {e}")
            raise PersistenceError("Failed to save your message. Please try again later.") from e

    def list_all(self) -> List[ContactSubmission]:
        try:
            with self._session_factory() as db:
                rows = db.query(Contact).order_by(Contact.created_at.asc(), Contact.id.asc()).all()
                return [ContactSubmission.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list contact submissions: {e}")
            raise PersistenceError("Failed to fetch contacts") from e


def build_contact_store(settings: Settings) -> ContactStore:
    """Create the store selected by CONTACT_STORE_BACKEND"""
    if settings.CONTACT_STORE_BACKEND == "database":
        engine = build_engine(settings.DATABASE_URL)
        if settings.DATABASE_AUTO_CREATE:
            Base.metadata.create_all(bind=engine)
        logger.info(f"Using database contact store ({engine.url.render_as_string(hide_password=True)})")
        return SqlContactStore(build_session_factory(engine))

    logger.info("Using in-memory contact store")
    return InMemoryContactStore()
