from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func
from app.core.db import Base


class InventoryAudit(Base):
    """Stock ledger. APPEND-ONLY. Never updated, never deleted."""

    __tablename__ = "inventory_audits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    location_id = Column(String(36), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False)
    adjustment_type = Column(String(10), nullable=False)
    quantity = Column(Integer, nullable=False)
    previous_stock = Column(Integer, nullable=False)
    new_stock = Column(Integer, nullable=False)
    reason = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    user_id = Column(String(100), nullable=False, default="system")
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_audit_quantity_magnitude"),
        CheckConstraint("adjustment_type IN ('add', 'remove', 'set')", name="ck_inventory_audit_type"),
        Index("ix_inventory_audit_product_location", "product_id", "location_id", "id"),
    )

    def __repr__(self):
        return (
            f"<InventoryAudit id={self.id} product_id={self.product_id} location_id={self.location_id} "
            f"{self.adjustment_type} {self.quantity} ({self.previous_stock}->{self.new_stock})>"
        )
