from sqlalchemy import Column, String, Boolean, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Product(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "products"

    name = Column(String(255), nullable=False, index=True)
    sku = Column(String(50), nullable=True, unique=True)
    is_retail = Column(Boolean, default=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    # None inherits the ALLOW_NEGATIVE_STOCK default
    allow_negative_stock = Column(Boolean, nullable=True)

    __table_args__ = (Index("ix_product_active", "is_active"),)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name} active={self.is_active}>"
