"""
Request payload helpers shared by the blueprints
"""

from app.exceptions import ValidationError


def require_fields(data, fields):
    for field in fields:
        if data.get(field) in (None, ''):
            raise ValidationError(f'{field} is required')


def int_arg(data, field):
    """Integer value of data[field], None when absent"""
    value = data.get(field)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')
