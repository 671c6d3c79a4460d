"""
Availability Service
Single place deciding whether a property is free for a range of days.
A day is unavailable when an active reservation or a blocked range covers it.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from extensions import db
from app.exceptions import NotFoundError
from app.models.property import Property
from app.services.blocked_date_service import BlockedDateService
from app.services.reservation_service import ReservationService
from app.utils.interval import END_BEFORE_START, START_IN_PAST, expand_to_days


PROPERTY_NOT_BOOKABLE = 'property not available for booking'
DATES_BOOKED = 'dates already booked'
DATES_BLOCKED = 'dates blocked by owner/admin'


@dataclass
class AvailabilityResult:
    available: bool
    reason: Optional[str] = None

    def to_dict(self):
        data = {'available': self.available}
        if self.reason:
            data['reason'] = self.reason
        return data


class AvailabilityService:
    """Unions reservations and blocked ranges into one availability answer"""

    @staticmethod
    def check_availability(property_id, interval, exclude_reservation_id=None,
                           require_bookable=False):
        """
        Check whether the property can be booked for the interval.

        With require_bookable the property record is loaded first and a
        non-rental or non-available listing is refused before any date
        checks. exclude_reservation_id skips one reservation, for
        re-validating an existing booking.
        """
        if require_bookable:
            property_obj = db.session.get(Property, property_id)
            if not property_obj:
                raise NotFoundError('Property not found')
            if not property_obj.is_bookable():
                return AvailabilityResult(False, PROPERTY_NOT_BOOKABLE)

        if interval.start >= interval.end:
            return AvailabilityResult(False, END_BEFORE_START)

        if interval.start < date.today():
            return AvailabilityResult(False, START_IN_PAST)

        if ReservationService.find_active_overlapping(
            property_id, interval, exclude_reservation_id=exclude_reservation_id
        ):
            return AvailabilityResult(False, DATES_BOOKED)

        if BlockedDateService.is_blocked(property_id, interval).blocked:
            return AvailabilityResult(False, DATES_BLOCKED)

        return AvailabilityResult(True)

    @staticmethod
    def is_date_blocked(property_id, interval):
        return BlockedDateService.is_blocked(property_id, interval)

    @staticmethod
    def unavailable_days(property_id, window):
        """Sorted days inside window covered by an active reservation or a blocked range"""
        days = set()
        ranges = [r.interval for r in ReservationService.find_active_overlapping(property_id, window)]
        ranges += [b.interval for b in BlockedDateService.list_in_range(property_id, window)]

        for interval in ranges:
            days.update(day for day in expand_to_days(interval) if window.contains_day(day))

        return sorted(days)
