"""
Property Routes
"""

from datetime import date, timedelta

from flask import Blueprint, request, jsonify
from extensions import db, limiter
from app.exceptions import NotFoundError, ValidationError
from app.models.property import Property
from app.services.availability_service import AvailabilityService
from app.utils.interval import DateInterval, parse_date

properties_bp = Blueprint('properties', __name__)

# Longest window the calendar endpoint expands day by day
MAX_CALENDAR_DAYS = 366


def _get_property(property_id):
    property_obj = db.session.get(Property, property_id)
    if not property_obj:
        raise NotFoundError('Property not found')
    return property_obj


@properties_bp.route('/<int:property_id>', methods=['GET'])
def get_property(property_id):
    """Get property details"""
    property_obj = _get_property(property_id)
    return jsonify({'property': property_obj.to_dict()}), 200


@properties_bp.route('/<int:property_id>/calendar', methods=['GET'])
@limiter.limit("100 per hour")
def get_property_calendar(property_id):
    """Days a calendar should render as unavailable, default window 90 days from today"""
    _get_property(property_id)

    start = parse_date(request.args['start_date'], 'start date') if request.args.get('start_date') else date.today()
    end = parse_date(request.args['end_date'], 'end date') if request.args.get('end_date') else start + timedelta(days=90)
    window = DateInterval(start, end)

    if window.start > window.end:
        raise ValidationError('end before start')
    if (window.end - window.start).days > MAX_CALENDAR_DAYS:
        raise ValidationError(f'Calendar window cannot exceed {MAX_CALENDAR_DAYS} days')

    days = AvailabilityService.unavailable_days(property_id, window)

    return jsonify({
        'property_id': property_id,
        'start_date': window.start.isoformat(),
        'end_date': window.end.isoformat(),
        'unavailable_dates': [day.isoformat() for day in days]
    }), 200
