"""
Reservation Service
Read-only queries over reservations. Writes go through BookingService and
ReservationStatusService.
"""

from extensions import db
from app.exceptions import NotFoundError, ValidationError
from app.models.reservation import Reservation, ReservationStatus, ACTIVE_STATUSES


class ReservationService:
    """Query surface for reservations"""

    @staticmethod
    def list_all(status=None, property_id=None, user_id=None):
        """All reservations, newest first, optionally filtered"""
        query = Reservation.query

        if status:
            try:
                query = query.filter(Reservation.status == ReservationStatus.parse(status))
            except ValueError as e:
                raise ValidationError(str(e))

        if property_id is not None:
            query = query.filter(Reservation.property_id == property_id)

        if user_id is not None:
            query = query.filter(Reservation.user_id == user_id)

        return query.order_by(Reservation.created_at.desc(), Reservation.id.desc()).all()

    @staticmethod
    def get_by_id(reservation_id):
        reservation = db.session.get(Reservation, reservation_id)
        if not reservation:
            raise NotFoundError('Reservation not found')
        return reservation

    @staticmethod
    def list_for_property(property_id):
        return (
            Reservation.query
            .filter(Reservation.property_id == property_id)
            .order_by(Reservation.start_date.asc())
            .all()
        )

    @staticmethod
    def list_for_user(user_id):
        return (
            Reservation.query
            .filter(Reservation.user_id == user_id)
            .order_by(Reservation.created_at.desc(), Reservation.id.desc())
            .all()
        )

    @staticmethod
    def find_active_overlapping(property_id, interval, exclude_reservation_id=None):
        """Active reservations of the property whose dates touch the interval"""
        query = Reservation.query.filter(
            Reservation.property_id == property_id,
            Reservation.status.in_(ACTIVE_STATUSES),
            Reservation.start_date <= interval.end,
            Reservation.end_date >= interval.start,
        )

        if exclude_reservation_id is not None:
            query = query.filter(Reservation.id != exclude_reservation_id)

        return query.order_by(Reservation.start_date.asc()).all()
