"""
Blocked Date Service
Admin-managed date ranges during which a property cannot be booked
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from flask import current_app
from extensions import db
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.blocked_date import BlockedDate
from app.services.locks import property_lock
from app.services.reservation_service import ReservationService
from app.utils.interval import DateInterval, END_BEFORE_START, START_IN_PAST


BLOCKED_RANGE_OVERLAP = 'There is already a blocked date range overlapping with the selected dates'
RESERVATION_OVERLAP = 'Cannot block dates that have existing reservations'

_UNSET = object()


@dataclass
class BlockedCheck:
    """Result of a blocked-date lookup"""
    blocked: bool
    matched_range: Optional[BlockedDate] = None

    def to_dict(self):
        data = {'blocked': self.blocked}
        if self.matched_range is not None:
            data['matched_range'] = self.matched_range.to_dict()
        return data


class BlockedDateService:
    """CRUD and lookups for blocked date ranges"""

    @staticmethod
    def create(property_id, interval, reason=None):
        """Block a range of days for a property"""
        interval.validate_for_booking(date.today())

        with property_lock(property_id) as property_obj:
            if not property_obj:
                raise NotFoundError('Property not found')

            BlockedDateService._ensure_free(property_id, interval)

            blocked = BlockedDate(
                property_id=property_id,
                start_date=interval.start,
                end_date=interval.end,
                reason=reason or None,
            )
            db.session.add(blocked)
            db.session.commit()

        current_app.logger.info(
            f'Blocked {interval.start}..{interval.end} for property {property_id}'
        )
        return blocked

    @staticmethod
    def update(blocked_id, start_date=None, end_date=None, reason=_UNSET):
        """Edit a blocked range; the merged range is re-validated and re-checked for overlaps"""
        blocked = BlockedDateService.get_by_id(blocked_id)

        start = start_date if start_date is not None else blocked.start_date
        end = end_date if end_date is not None else blocked.end_date
        interval = DateInterval(start, end)

        if interval.start >= interval.end:
            raise ValidationError(END_BEFORE_START)
        if start_date is not None and start_date < date.today():
            raise ValidationError(START_IN_PAST)

        with property_lock(blocked.property_id):
            if start_date is not None or end_date is not None:
                BlockedDateService._ensure_free(blocked.property_id, interval, exclude_id=blocked.id)

            blocked.start_date = interval.start
            blocked.end_date = interval.end
            if reason is not _UNSET:
                blocked.reason = reason

            db.session.commit()

        return blocked

    @staticmethod
    def delete(blocked_id):
        blocked = BlockedDateService.get_by_id(blocked_id)
        property_id = blocked.property_id

        db.session.delete(blocked)
        db.session.commit()

        current_app.logger.info(f'Deleted blocked range {blocked_id} of property {property_id}')

    @staticmethod
    def get_by_id(blocked_id):
        blocked = db.session.get(BlockedDate, blocked_id)
        if not blocked:
            raise NotFoundError('Blocked date not found')
        return blocked

    @staticmethod
    def list_all():
        """All blocked ranges, newest first (admin view)"""
        return BlockedDate.query.order_by(BlockedDate.created_at.desc(), BlockedDate.id.desc()).all()

    @staticmethod
    def list_for_property(property_id):
        return (
            BlockedDate.query
            .filter(BlockedDate.property_id == property_id)
            .order_by(BlockedDate.start_date.asc())
            .all()
        )

    @staticmethod
    def list_in_range(property_id, interval, exclude_id=None):
        """Blocked ranges of the property overlapping the interval"""
        query = BlockedDate.query.filter(
            BlockedDate.property_id == property_id,
            BlockedDate.start_date <= interval.end,
            BlockedDate.end_date >= interval.start,
        )

        if exclude_id is not None:
            query = query.filter(BlockedDate.id != exclude_id)

        return query.order_by(BlockedDate.start_date.asc()).all()

    @staticmethod
    def is_blocked(property_id, interval):
        matches = BlockedDateService.list_in_range(property_id, interval)
        if matches:
            return BlockedCheck(blocked=True, matched_range=matches[0])
        return BlockedCheck(blocked=False)

    @staticmethod
    def delete_within(property_id, interval):
        """Stage deletion of ranges lying inside the interval; the caller commits"""
        ranges = BlockedDate.query.filter(
            BlockedDate.property_id == property_id,
            BlockedDate.start_date >= interval.start,
            BlockedDate.end_date <= interval.end,
        ).all()

        for blocked in ranges:
            db.session.delete(blocked)

        return len(ranges)

    @staticmethod
    def _ensure_free(property_id, interval, exclude_id=None):
        if BlockedDateService.list_in_range(property_id, interval, exclude_id=exclude_id):
            raise ConflictError(BLOCKED_RANGE_OVERLAP)

        if ReservationService.find_active_overlapping(property_id, interval):
            raise ConflictError(RESERVATION_OVERLAP)
