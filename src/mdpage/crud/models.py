"""Database table for published pages"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class Page(SQLModel, table=True):
    """A compiled page registered at a route; the route is the natural key."""
    __tablename__ = "pages"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    route_path: str = Field(..., sa_column=Column(String(512), nullable=False, unique=True, index=True))
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    style: str = Field(..., nullable=False)
    public: bool = Field(default=True, nullable=False)
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    code: str = Field(..., sa_column=Column(Text, nullable=False))
    word_count: int = Field(default=0, nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
