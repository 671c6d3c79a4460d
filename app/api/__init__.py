"""
API Package
"""

# Import all blueprints for easy access
from app.api.auth import auth_bp
from app.api.properties import properties_bp
from app.api.reservations import reservations_bp
from app.api.blocked_dates import blocked_dates_bp

__all__ = [
    'auth_bp',
    'properties_bp',
    'reservations_bp',
    'blocked_dates_bp',
]
