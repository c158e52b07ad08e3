"""Database table definitions for the generated-file cache"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlmodel import Field, SQLModel


class GeneratedFile(SQLModel, table=True):
    """The last generated unit for a source document and the cache key it was built from"""
    __tablename__ = "generated_files"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    path: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    unit_name: str = Field(..., sa_column=Column(Text, nullable=False))
    cache_key: str = Field(..., sa_column=Column(String(64), nullable=False))
    mode: str = Field(..., nullable=False, description="Generation mode (full or declaration)")
    text: str = Field(..., sa_column=Column(Text, nullable=False))
    diagnostics: Optional[List[Dict[str, Any]]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    committed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
