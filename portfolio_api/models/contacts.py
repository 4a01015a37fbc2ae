# portfolio_api/models/contacts.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text
from portfolio_api.database.database import Base, UTCDateTime


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False)
    subject = Column(String(100), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(UTCDateTime(), nullable=False, default=_utcnow, index=True)
