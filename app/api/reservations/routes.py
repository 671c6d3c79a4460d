"""
Reservations Blueprint
"""

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from extensions import limiter
from app.models.reservation import GuestContact
from app.services.availability_service import AvailabilityService
from app.services.booking_service import BookingService, ReservationRequest
from app.services.reservation_service import ReservationService
from app.services.reservation_status_service import ReservationStatusService
from app.utils.auth import current_user, current_user_id
from app.utils.decorators.admin_required import admin_required
from app.utils.interval import DateInterval
from app.utils.params import int_arg, require_fields

reservations_bp = Blueprint('reservations', __name__)


@reservations_bp.route('/', methods=['POST'])
@jwt_required(optional=True)
@limiter.limit("20 per hour")
def create_reservation():
    """Create a reservation (guests and logged-in users)"""
    data = request.get_json(silent=True) or {}

    require_fields(data, ['property_id', 'start_date', 'end_date'])

    reservation_request = ReservationRequest(
        property_id=int_arg(data, 'property_id'),
        interval=DateInterval.parse(data['start_date'], data['end_date']),
        contact=GuestContact(
            name=data.get('guest_name'),
            email=data.get('guest_email'),
            phone=data.get('guest_phone'),
            country=data.get('guest_country'),
        ),
        number_of_guests=int_arg(data, 'number_of_guests'),
        message=data.get('message'),
    )

    reservation = BookingService.create_reservation(reservation_request, current_user_id())

    return jsonify({
        'message': 'Reservation created successfully',
        'reservation': reservation.to_dict(include_property=True)
    }), 201


@reservations_bp.route('/check-availability', methods=['POST'])
@limiter.limit("100 per hour")
def check_availability():
    """Check whether a property can be booked for a date range"""
    data = request.get_json(silent=True) or {}

    require_fields(data, ['property_id', 'start_date', 'end_date'])

    result = AvailabilityService.check_availability(
        int_arg(data, 'property_id'),
        DateInterval.parse(data['start_date'], data['end_date']),
        require_bookable=True,
    )

    return jsonify(result.to_dict()), 200


@reservations_bp.route('/', methods=['GET'])
@jwt_required()
@admin_required()
def get_reservations():
    """Get all reservations (admin only)"""
    reservations = ReservationService.list_all(
        status=request.args.get('status'),
        property_id=request.args.get('property_id', type=int),
        user_id=request.args.get('user_id', type=int),
    )

    return jsonify({
        'reservations': [r.to_dict(include_property=True) for r in reservations]
    }), 200


@reservations_bp.route('/my', methods=['GET'])
@jwt_required()
def get_my_reservations():
    """Get current user's reservations"""
    reservations = ReservationService.list_for_user(current_user_id())

    return jsonify({
        'reservations': [r.to_dict(include_property=True) for r in reservations]
    }), 200


@reservations_bp.route('/property/<int:property_id>', methods=['GET'])
@jwt_required()
@admin_required()
def get_property_reservations(property_id):
    """Get reservations of a property (admin only)"""
    reservations = ReservationService.list_for_property(property_id)

    return jsonify({
        'property_id': property_id,
        'reservations': [r.to_dict() for r in reservations]
    }), 200


@reservations_bp.route('/<int:reservation_id>', methods=['GET'])
@jwt_required()
def get_reservation(reservation_id):
    """Get reservation details"""
    user = current_user()
    reservation = ReservationService.get_by_id(reservation_id)

    # Check authorization
    if not user or (not user.is_admin and reservation.user_id != user.id):
        return jsonify({'error': 'Unauthorized'}), 403

    return jsonify({
        'reservation': reservation.to_dict(include_property=True)
    }), 200


@reservations_bp.route('/<int:reservation_id>/status', methods=['PUT'])
@jwt_required()
@admin_required()
def update_reservation_status(reservation_id):
    """Confirm or cancel a reservation (admin only)"""
    data = request.get_json(silent=True) or {}

    require_fields(data, ['status'])

    reservation = ReservationStatusService.set_status(reservation_id, data['status'])

    return jsonify({
        'message': 'Reservation status updated successfully',
        'reservation': reservation.to_dict()
    }), 200


@reservations_bp.route('/<int:reservation_id>', methods=['PUT'])
@jwt_required()
@admin_required()
def reschedule_reservation(reservation_id):
    """Move a reservation to new dates (admin only)"""
    data = request.get_json(silent=True) or {}

    require_fields(data, ['start_date', 'end_date'])

    reservation = BookingService.reschedule_reservation(
        reservation_id,
        DateInterval.parse(data['start_date'], data['end_date']),
    )

    return jsonify({
        'message': 'Reservation updated successfully',
        'reservation': reservation.to_dict()
    }), 200


@reservations_bp.route('/<int:reservation_id>/cancel', methods=['POST'])
@jwt_required()
def cancel_reservation(reservation_id):
    """Cancel a reservation (owner or admin)"""
    user = current_user()

    reservation = ReservationStatusService.cancel(
        reservation_id,
        requesting_user_id=user.id if user else None,
        is_admin=bool(user and user.is_admin),
    )

    return jsonify({
        'message': 'Reservation cancelled successfully',
        'reservation': reservation.to_dict()
    }), 200


@reservations_bp.route('/<int:reservation_id>', methods=['DELETE'])
@jwt_required()
@admin_required()
def delete_reservation(reservation_id):
    """Delete a reservation (admin only)"""
    BookingService.delete_reservation(reservation_id)

    return jsonify({'message': 'Reservation deleted'}), 200
