"""
Module: warehouse_kernel.models.location
Responsibility: ORM persistence for storage locations, their capacity
    thresholds, and item <-> location assignments.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Location.code is unique.
    - At most one LocationThreshold per location; 0 <= min < max.
    - (item_id, location_id) is unique on InventoryLocation.

Failure modes:
    - IntegrityError on duplicate code / threshold / assignment if a caller
      bypasses the services (which check first and raise typed errors).
"""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warehouse_kernel.db.base import TrackedBase, UUIDString

if TYPE_CHECKING:
    from warehouse_kernel.models.item import Item


class Location(TrackedBase):
    """
    A physical storage slot (sector, shelf, bin...).

    The type tag is a free string; the kernel attaches no behavior to it.
    """

    __tablename__ = "locations"

    __table_args__ = (
        UniqueConstraint("code", name="uq_location_code"),
        Index("idx_location_active", "is_active"),
    )

    # e.g. "A1-S1-R3"
    code: Mapped[str] = mapped_column(String(50), nullable=False)

    name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    location_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    threshold: Mapped["LocationThreshold | None"] = relationship(
        back_populates="location",
        cascade="all, delete-orphan",
        uselist=False,
    )

    inventory_locations: Mapped[list["InventoryLocation"]] = relationship(
        back_populates="location",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Location {self.code}>"


class LocationThreshold(TrackedBase):
    """Configured min/max occupancy bounds for one location."""

    __tablename__ = "location_thresholds"

    __table_args__ = (
        UniqueConstraint("location_id", name="uq_threshold_location"),
        CheckConstraint("min_threshold >= 0", name="ck_threshold_min_non_negative"),
        CheckConstraint("min_threshold < max_threshold", name="ck_threshold_min_below_max"),
    )

    location_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("locations.id"),
        nullable=False,
    )

    min_threshold: Mapped[int] = mapped_column(Integer, nullable=False)

    max_threshold: Mapped[int] = mapped_column(Integer, nullable=False)

    location: Mapped["Location"] = relationship(back_populates="threshold")

    def __repr__(self) -> str:
        return f"<LocationThreshold min={self.min_threshold} max={self.max_threshold}>"


class InventoryLocation(TrackedBase):
    """Records that an item is stored at a location."""

    __tablename__ = "inventory_locations"

    __table_args__ = (
        UniqueConstraint("item_id", "location_id", name="uq_inventory_item_location"),
        Index("idx_inventory_location", "location_id"),
    )

    item_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("items.id"),
        nullable=False,
    )

    location_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("locations.id"),
        nullable=False,
    )

    item: Mapped["Item"] = relationship(back_populates="locations")

    location: Mapped["Location"] = relationship(back_populates="inventory_locations")

    def __repr__(self) -> str:
        return f"<InventoryLocation item={self.item_id} location={self.location_id}>"
