from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from .db import Base


class KeyValueEntry(Base):
	__tablename__ = "key_value_store"
	# Single value per fixed key (e.g. the learner's total score as a decimal string)
	key = Column(String(128), primary_key=True, index=True)
	value = Column(Text, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
