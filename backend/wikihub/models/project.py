# backend/wikihub/models/project.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from ..database import Base


class ProjectState(enum.IntEnum):
    PRIVATE = 0
    PUBLIC = 1
    PASSWORD_PROTECTED = 2


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    open_state = Column(Integer, nullable=False, default=ProjectState.PRIVATE)
    password = Column(String(20), nullable=True)  # Only set when PASSWORD_PROTECTED
    creator_id = Column(Integer, nullable=False, index=True)
    modified_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    modified_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
