"""
Reservation Status Service
Status transitions of reservations and their side effects
"""

from flask import current_app
from extensions import db
from app.exceptions import ConflictError, ValidationError
from app.models.reservation import ReservationStatus
from app.services.blocked_date_service import BlockedDateService
from app.services.email_service import EmailService, RESERVATION_STATUS_CHANGED
from app.services.reservation_service import ReservationService


# Transitions that change anything; same-status requests are no-ops
ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CANCELLED},
    ReservationStatus.CANCELLED: set(),
}


class ReservationStatusService:
    """PENDING -> CONFIRMED | CANCELLED, CONFIRMED -> CANCELLED"""

    @staticmethod
    def set_status(reservation_id, new_status):
        try:
            new_status = ReservationStatus.parse(new_status)
        except ValueError as e:
            raise ValidationError(str(e))

        reservation = ReservationService.get_by_id(reservation_id)
        old_status = reservation.status

        if old_status == new_status:
            return reservation

        if new_status not in ALLOWED_TRANSITIONS[old_status]:
            raise ConflictError(
                f'Cannot change reservation status from {old_status.value} to {new_status.value}'
            )

        released = 0
        try:
            if new_status == ReservationStatus.CANCELLED:
                # Shadow blocks inside the booking window go with the booking
                released = BlockedDateService.delete_within(reservation.property_id, reservation.interval)
            reservation.status = new_status
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f'Reservation {reservation.id} {old_status.value} -> {new_status.value}'
            + (f', released {released} blocked range(s)' if released else '')
        )

        EmailService.notify(RESERVATION_STATUS_CHANGED, {
            'reservation': reservation.to_dict(),
            'previous_status': old_status.value,
        })

        return reservation

    @staticmethod
    def cancel(reservation_id, requesting_user_id=None, is_admin=False):
        """Cancel on behalf of the reservation owner or an admin"""
        reservation = ReservationService.get_by_id(reservation_id)

        if not is_admin and (requesting_user_id is None or reservation.user_id != requesting_user_id):
            raise PermissionError('Only the reservation owner or an admin can cancel it')

        return ReservationStatusService.set_status(reservation.id, ReservationStatus.CANCELLED)
