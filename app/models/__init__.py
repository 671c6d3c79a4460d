"""
Models package initialization
Import all models here for easy access
"""

from app.models.user import User
from app.models.property import Property, ListingType, PropertyStatus
from app.models.reservation import (
    Reservation,
    ReservationStatus,
    ACTIVE_STATUSES,
    GuestContact,
    UserRef,
)
from app.models.blocked_date import BlockedDate

__all__ = [
    'User',
    'Property',
    'ListingType',
    'PropertyStatus',
    'Reservation',
    'ReservationStatus',
    'ACTIVE_STATUSES',
    'GuestContact',
    'UserRef',
    'BlockedDate',
]
