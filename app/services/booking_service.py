"""
Booking Service
Validates a reservation request end to end, prices it and stores it as PENDING
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from flask import current_app
from extensions import db
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.reservation import GuestContact, Reservation, ReservationStatus
from app.models.user import User
from app.services.availability_service import AvailabilityService
from app.services.email_service import EmailService, RESERVATION_CREATED
from app.services.locks import property_lock
from app.services.reservation_service import ReservationService
from app.utils.interval import DateInterval


MISSING_GUEST_FIELDS = 'Guest name, email and phone are required'
PROPERTY_NOT_RENTAL = 'This property is not available for rent'
PROPERTY_NOT_AVAILABLE = 'This property is not currently available'


@dataclass
class ReservationRequest:
    """Everything a caller supplies to book a property"""
    property_id: int
    interval: DateInterval
    contact: GuestContact = field(default_factory=GuestContact)
    number_of_guests: Optional[int] = None
    message: Optional[str] = None


class BookingService:
    """Creates and reschedules reservations"""

    @staticmethod
    def create_reservation(request, requesting_user_id=None):
        # 1. Dates
        request.interval.validate_for_booking(date.today())

        # 2. Identity
        user = None
        if requesting_user_id is not None:
            user = db.session.get(User, requesting_user_id)
            if not user:
                raise NotFoundError('User not found')
        elif not request.contact.is_complete():
            raise ValidationError(MISSING_GUEST_FIELDS)
        request.contact.validate()

        if request.number_of_guests is not None and request.number_of_guests < 1:
            raise ValidationError('number_of_guests must be at least 1')

        with property_lock(request.property_id) as property_obj:
            # 3. Property eligibility
            if not property_obj:
                raise NotFoundError('Property not found')
            if not property_obj.is_rental_listing:
                raise ValidationError(PROPERTY_NOT_RENTAL)
            if not property_obj.is_bookable():
                raise ValidationError(PROPERTY_NOT_AVAILABLE)

            # 4. Availability, read right before the insert
            result = AvailabilityService.check_availability(property_obj.id, request.interval)
            if not result.available:
                current_app.logger.warning(
                    f'Reservation refused for property {property_obj.id} '
                    f'{request.interval.start}..{request.interval.end}: {result.reason}'
                )
                raise ConflictError(result.reason)

            # 5. Price snapshot
            reservation = Reservation(
                property_id=property_obj.id,
                start_date=request.interval.start,
                end_date=request.interval.end,
                price_per_night=property_obj.price,
                number_of_guests=request.number_of_guests,
                message=request.message,
                status=ReservationStatus.PENDING,
            )
            reservation.calculate_price()

            # 6. Contact details, backfilled from the account
            contact = request.contact
            if user is not None:
                reservation.user_id = user.id
                contact = contact.merged_with(
                    GuestContact(name=user.name, email=user.email, phone=user.phone, country=user.country)
                )
            reservation.apply_contact(contact)

            # 7. Persist
            db.session.add(reservation)
            db.session.commit()

        current_app.logger.info(
            f'Reservation {reservation.id} created for property {reservation.property_id} '
            f'({reservation.nights} nights, total {reservation.total_price})'
        )

        # 8. Fire and forget
        EmailService.notify(RESERVATION_CREATED, {
            'reservation': reservation.to_dict(),
            'property': property_obj.to_dict(),
        })

        return reservation

    @staticmethod
    def reschedule_reservation(reservation_id, interval):
        """Move an active reservation to new dates, keeping its nightly price"""
        reservation = ReservationService.get_by_id(reservation_id)
        if not reservation.is_active:
            raise ConflictError('Cancelled reservations cannot be rescheduled')

        interval.validate_for_booking(date.today())

        with property_lock(reservation.property_id):
            result = AvailabilityService.check_availability(
                reservation.property_id, interval, exclude_reservation_id=reservation.id
            )
            if not result.available:
                raise ConflictError(result.reason)

            reservation.start_date = interval.start
            reservation.end_date = interval.end
            reservation.calculate_price()
            db.session.commit()

        current_app.logger.info(
            f'Reservation {reservation.id} moved to {interval.start}..{interval.end}'
        )
        return reservation

    @staticmethod
    def delete_reservation(reservation_id):
        reservation = ReservationService.get_by_id(reservation_id)
        db.session.delete(reservation)
        db.session.commit()
        current_app.logger.info(f'Reservation {reservation_id} deleted')
