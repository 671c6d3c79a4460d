"""
Admin-only route decorator
"""

from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from extensions import db
from app.models.user import User


def admin_required():
    """Reject the request unless the JWT belongs to an active admin"""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            verify_jwt_in_request()
            user = db.session.get(User, int(get_jwt_identity()))

            if not user or not user.is_active or not user.is_admin:
                return jsonify({'error': 'Forbidden', 'message': 'Admin access required'}), 403

            return fn(*args, **kwargs)
        return decorator
    return wrapper
