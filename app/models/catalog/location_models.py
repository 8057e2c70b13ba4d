from sqlalchemy import Column, String, Boolean, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Location(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "locations"

    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (Index("ix_location_active", "is_active"),)

    def __repr__(self):
        return f"<Location id={self.id} name={self.name} active={self.is_active}>"
