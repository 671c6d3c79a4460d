"""
Reservations Blueprint
"""

from flask import Blueprint
from app.api.reservations.routes import reservations_bp

__all__ = ['reservations_bp']
