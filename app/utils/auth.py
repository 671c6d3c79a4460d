"""
Helpers for reading the JWT identity inside a request
"""

from flask_jwt_extended import get_jwt_identity
from extensions import db
from app.models.user import User


def current_user_id():
    """Id of the authenticated user, or None for anonymous requests"""
    identity = get_jwt_identity()
    return int(identity) if identity is not None else None


def current_user():
    user_id = current_user_id()
    if user_id is None:
        return None
    return db.session.get(User, user_id)
