"""Shared base for SQLModel domain entities"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns; tables also set
# sqlite_autoincrement so deleted ids are never reused
IdType = BigInteger().with_variant(Integer(), "sqlite")


def generate_uuid() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime"""
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Base class for all persistent entities"""
