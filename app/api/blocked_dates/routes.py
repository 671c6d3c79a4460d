from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from app.exceptions import ValidationError
from app.services.availability_service import AvailabilityService
from app.services.blocked_date_service import BlockedDateService
from app.utils.decorators.admin_required import admin_required
from app.utils.interval import DateInterval, parse_date
from app.utils.params import int_arg, require_fields

blocked_dates_bp = Blueprint('blocked_dates', __name__)


def _interval_from(source):
    start = source.get('start_date')
    end = source.get('end_date')
    if not start or not end:
        raise ValidationError('start_date and end_date are required')
    return DateInterval.parse(start, end)


@blocked_dates_bp.route('/', methods=['GET'])
@jwt_required()
@admin_required()
def get_all_blocked_dates():
    """Get every blocked range (admin only)"""
    blocked_dates = BlockedDateService.list_all()

    return jsonify({
        'blocked_dates': [bd.to_dict() for bd in blocked_dates]
    }), 200


@blocked_dates_bp.route('/', methods=['POST'])
@jwt_required()
@admin_required()
def create_blocked_date():
    """Block a date range for a property"""
    data = request.get_json(silent=True) or {}

    require_fields(data, ['property_id'])

    blocked = BlockedDateService.create(
        int_arg(data, 'property_id'),
        _interval_from(data),
        reason=data.get('reason'),
    )

    return jsonify({'message': 'Dates blocked', 'blocked_date': blocked.to_dict()}), 201


@blocked_dates_bp.route('/<int:blocked_id>', methods=['GET'])
def get_blocked_date(blocked_id):
    blocked = BlockedDateService.get_by_id(blocked_id)
    return jsonify({'blocked_date': blocked.to_dict()}), 200


@blocked_dates_bp.route('/<int:blocked_id>', methods=['PUT'])
@jwt_required()
@admin_required()
def update_blocked_date(blocked_id):
    """Edit a blocked range"""
    data = request.get_json(silent=True) or {}

    changes = {}
    if data.get('start_date'):
        changes['start_date'] = parse_date(data['start_date'], 'start date')
    if data.get('end_date'):
        changes['end_date'] = parse_date(data['end_date'], 'end date')
    if 'reason' in data:
        changes['reason'] = data['reason']

    blocked = BlockedDateService.update(blocked_id, **changes)

    return jsonify({'message': 'Blocked date updated', 'blocked_date': blocked.to_dict()}), 200


@blocked_dates_bp.route('/<int:blocked_id>', methods=['DELETE'])
@jwt_required()
@admin_required()
def delete_blocked_date(blocked_id):
    """Unblock a date range"""
    BlockedDateService.delete(blocked_id)

    return jsonify({'message': 'Blocked date deleted successfully'}), 200


@blocked_dates_bp.route('/property/<int:property_id>', methods=['GET'])
def get_property_blocked_dates(property_id):
    """Get all blocked ranges for a property"""
    blocked_dates = BlockedDateService.list_for_property(property_id)

    return jsonify({
        'property_id': property_id,
        'blocked_dates': [bd.to_dict() for bd in blocked_dates]
    }), 200


@blocked_dates_bp.route('/property/<int:property_id>/range', methods=['GET'])
def get_property_blocked_dates_in_range(property_id):
    """Blocked ranges overlapping ?start_date=&end_date="""
    blocked_dates = BlockedDateService.list_in_range(property_id, _interval_from(request.args))

    return jsonify({
        'property_id': property_id,
        'blocked_dates': [bd.to_dict() for bd in blocked_dates]
    }), 200


@blocked_dates_bp.route('/property/<int:property_id>/check', methods=['GET'])
def check_blocked(property_id):
    """Is any day of ?start_date=&end_date= blocked"""
    result = AvailabilityService.is_date_blocked(property_id, _interval_from(request.args))

    return jsonify(result.to_dict()), 200
