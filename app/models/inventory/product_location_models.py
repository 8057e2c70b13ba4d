from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.db import Base
from app.models.base.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class ProductLocation(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Stock of one product at one location. Mutated only by stock adjustments."""

    __tablename__ = "product_locations"

    product_id = Column(String(36), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    location_id = Column(String(36), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False, index=True)
    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)

    product = relationship("Product", lazy="selectin")
    location = relationship("Location", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("product_id", "location_id", name="uq_product_location_pair"),
    )

    def __repr__(self):
        return f"<ProductLocation product_id={self.product_id} location_id={self.location_id} stock={self.stock}>"
