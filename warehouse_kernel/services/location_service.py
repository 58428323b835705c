"""
LocationService -- storage locations and their capacity thresholds.

Responsibility:
    Creates and maintains Location rows and the one-per-location
    LocationThreshold that the capacity engine reads.

Failure modes:
    - DuplicateLocationCodeError: code already used.
    - ThresholdAlreadyExistsError: location already has a threshold.
    - InvalidThresholdError: bounds negative or min >= max.
    - LocationNotFoundError / LocationThresholdNotFoundError.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from warehouse_kernel.domain.clock import Clock
from warehouse_kernel.domain.dtos import LocationInfo, ThresholdInfo
from warehouse_kernel.exceptions import (
    DuplicateLocationCodeError,
    InvalidThresholdError,
    LocationNotFoundError,
    LocationThresholdNotFoundError,
    ThresholdAlreadyExistsError,
    ValidationError,
)
from warehouse_kernel.logging_config import get_logger
from warehouse_kernel.models.location import Location, LocationThreshold
from warehouse_kernel.services.base import BaseService

logger = get_logger("services.location")


def _check_bounds(min_threshold: int, max_threshold: int) -> None:
    if min_threshold is None or max_threshold is None:
        raise InvalidThresholdError(min_threshold, max_threshold)
    if min_threshold < 0 or max_threshold < 0 or min_threshold >= max_threshold:
        raise InvalidThresholdError(min_threshold, max_threshold)


class LocationService(BaseService[Location]):
    """Service for managing locations and thresholds."""

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session, clock)

    def create_location(
        self,
        code: str,
        actor_id: UUID,
        name: str | None = None,
        location_type: str | None = None,
        description: str | None = None,
    ) -> LocationInfo:
        self._require_actor(actor_id)
        if not code or not code.strip():
            raise ValidationError("code", "is required")
        code = code.strip()
        if self._find_by_code(code) is not None:
            raise DuplicateLocationCodeError(code)

        now = self._clock.now()
        location = Location(
            code=code,
            name=name,
            location_type=location_type,
            description=description,
            is_active=True,
            created_at=now,
            updated_at=now,
            created_by_id=actor_id,
        )
        self.session.add(location)
        self.session.flush()

        logger.info(
            "location_created",
            extra={"location_id": str(location.id), "code": code},
        )
        return LocationInfo.from_model(location)

    def update_location(
        self,
        location_id: UUID,
        actor_id: UUID,
        name: str | None = None,
        location_type: str | None = None,
        description: str | None = None,
    ) -> LocationInfo:
        """Update descriptive fields.  None leaves a field unchanged."""
        self._require_actor(actor_id)
        location = self._get_location(location_id)
        if name is not None:
            location.name = name
        if location_type is not None:
            location.location_type = location_type
        if description is not None:
            location.description = description
        location.updated_by_id = actor_id
        self.session.flush()
        return LocationInfo.from_model(location)

    def deactivate_location(self, location_id: UUID, actor_id: UUID) -> LocationInfo:
        self._require_actor(actor_id)
        location = self._get_location(location_id)
        location.is_active = False
        location.updated_by_id = actor_id
        self.session.flush()

        logger.info("location_deactivated", extra={"location_id": str(location_id)})
        return LocationInfo.from_model(location)

    def create_threshold(
        self,
        location_id: UUID,
        min_threshold: int,
        max_threshold: int,
        actor_id: UUID,
    ) -> ThresholdInfo:
        self._require_actor(actor_id)
        self._get_location(location_id)
        _check_bounds(min_threshold, max_threshold)
        if self._find_threshold(location_id) is not None:
            raise ThresholdAlreadyExistsError(str(location_id))

        now = self._clock.now()
        threshold = LocationThreshold(
            location_id=location_id,
            min_threshold=min_threshold,
            max_threshold=max_threshold,
            created_at=now,
            updated_at=now,
            created_by_id=actor_id,
        )
        self.session.add(threshold)
        self.session.flush()

        logger.info(
            "threshold_created",
            extra={
                "location_id": str(location_id),
                "min_threshold": min_threshold,
                "max_threshold": max_threshold,
            },
        )
        return ThresholdInfo.from_model(threshold)

    def update_threshold(
        self,
        location_id: UUID,
        min_threshold: int,
        max_threshold: int,
        actor_id: UUID,
    ) -> ThresholdInfo:
        self._require_actor(actor_id)
        threshold = self._require_threshold(location_id)
        _check_bounds(min_threshold, max_threshold)
        threshold.min_threshold = min_threshold
        threshold.max_threshold = max_threshold
        threshold.updated_by_id = actor_id
        self.session.flush()

        logger.info(
            "threshold_updated",
            extra={
                "location_id": str(location_id),
                "min_threshold": min_threshold,
                "max_threshold": max_threshold,
            },
        )
        return ThresholdInfo.from_model(threshold)

    def delete_threshold(self, location_id: UUID, actor_id: UUID) -> None:
        self._require_actor(actor_id)
        threshold = self._require_threshold(location_id)
        self.session.delete(threshold)
        self.session.flush()
        logger.info("threshold_deleted", extra={"location_id": str(location_id)})

    def get_threshold(self, location_id: UUID) -> ThresholdInfo:
        return ThresholdInfo.from_model(self._require_threshold(location_id))

    def _get_location(self, location_id: UUID) -> Location:
        location = self.session.get(Location, location_id)
        if location is None:
            raise LocationNotFoundError(str(location_id))
        return location

    def _find_by_code(self, code: str) -> Location | None:
        return self.session.execute(
            select(Location).where(Location.code == code)
        ).scalar_one_or_none()

    def _find_threshold(self, location_id: UUID) -> LocationThreshold | None:
        return self.session.execute(
            select(LocationThreshold).where(LocationThreshold.location_id == location_id)
        ).scalar_one_or_none()

    def _require_threshold(self, location_id: UUID) -> LocationThreshold:
        threshold = self._find_threshold(location_id)
        if threshold is None:
            raise LocationThresholdNotFoundError(str(location_id))
        return threshold
