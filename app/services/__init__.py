"""
Services Package
Business logic and external service integrations
"""

from app.services.email_service import EmailService
from app.services.reservation_service import ReservationService
from app.services.blocked_date_service import BlockedDateService, BlockedCheck
from app.services.availability_service import AvailabilityService, AvailabilityResult
from app.services.booking_service import BookingService, ReservationRequest
from app.services.reservation_status_service import ReservationStatusService

__all__ = [
    'EmailService',
    'ReservationService',
    'BlockedDateService',
    'BlockedCheck',
    'AvailabilityService',
    'AvailabilityResult',
    'BookingService',
    'ReservationRequest',
    'ReservationStatusService',
]
