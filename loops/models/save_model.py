from sqlalchemy import Column, Integer, String, func, DateTime, Boolean, JSON
from loops.core.database import Base
from uuid import uuid4
from sqlalchemy import Uuid


class SaveSlot(Base):
    """One player's progress plus the level they are in the middle of"""
    __tablename__ = "save_slots"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    level_number = Column(Integer, nullable=False, default=1)
    unlocked_level_number = Column(Integer, nullable=False, default=1)
    is_custom_level = Column(Boolean, nullable=False, default=False)
    custom_parameters = Column(JSON)  # last custom level settings
    tile_set = Column(String, nullable=False, default="trypo")
    level = Column(JSON)  # LevelSnapshot of the level being played
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
