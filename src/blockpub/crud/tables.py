"""Database table definitions for build records"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class RenderRecord(SQLModel, table=True):
    """Last known output of one render pass, keyed by render name"""
    __tablename__ = "render_records"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    path: str = Field(..., sa_column=Column(Text, nullable=False))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    permalink: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
