# expathub_shared/models/base.py
import uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func

Base = declarative_base()


def new_id() -> str:
    """Строковый UUID (идентификаторы приходят из BaaS в виде строк)"""
    return str(uuid.uuid4())


class TimestampMixin:
    """Миксин для добавления временных меток"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
