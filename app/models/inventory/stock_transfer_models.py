from sqlalchemy import Column, Integer, String, Text, ForeignKey, CheckConstraint, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class StockTransfer(Base, TimestampMixin):
    """Completed movement of stock between two locations."""

    __tablename__ = "stock_transfers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transfer_code = Column(String(40), nullable=False, unique=True, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    from_location_id = Column(String(36), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False)
    to_location_id = Column(String(36), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False)
    quantity = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="completed")
    reason = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    created_by = Column(String(100), nullable=False, default="system")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_stock_transfer_qty_positive"),
        CheckConstraint("from_location_id != to_location_id", name="ck_stock_transfer_location_diff"),
        Index("ix_stock_transfer_locations", "from_location_id", "to_location_id"),
    )

    def __repr__(self):
        return f"<StockTransfer {self.transfer_code} product_id={self.product_id} {self.from_location_id}->{self.to_location_id} qty={self.quantity}>"
