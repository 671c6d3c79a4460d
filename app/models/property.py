"""
Property Model
"""

from extensions import db
from datetime import datetime
from enum import Enum


class ListingType(str, Enum):
    """Whether a listing is offered for rent or for sale"""
    RENT = 'rent'
    SALE = 'sale'


class PropertyStatus(str, Enum):
    """Property status enum"""
    AVAILABLE = 'available'
    RESERVED = 'reserved'
    RENTED = 'rented'
    SOLD = 'sold'
    INACTIVE = 'inactive'


class Property(db.Model):
    """Property/Listing model"""

    __tablename__ = 'properties'

    id = db.Column(db.Integer, primary_key=True)

    # Basic Information
    title = db.Column(db.String(200), nullable=False)
    listing_type = db.Column(db.Enum(ListingType), default=ListingType.RENT, nullable=False)
    status = db.Column(db.Enum(PropertyStatus), default=PropertyStatus.AVAILABLE, nullable=False)

    # Location
    address = db.Column(db.String(255))
    city = db.Column(db.String(100))

    # Pricing: per night for rentals
    price = db.Column(db.Numeric(12, 2), nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    reservations = db.relationship('Reservation', backref='property', lazy='dynamic',
                                   cascade='all, delete-orphan')
    blocked_dates = db.relationship('BlockedDate', backref='property', lazy='dynamic',
                                    cascade='all, delete-orphan')

    def __init__(self, **kwargs):
        """Initialize property"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    @property
    def is_rental_listing(self):
        return self.listing_type == ListingType.RENT

    def is_bookable(self):
        """Rental listing that is generally open for reservations"""
        return self.is_rental_listing and self.status == PropertyStatus.AVAILABLE

    def to_dict(self):
        """Convert property to dictionary"""
        return {
            'id': self.id,
            'title': self.title,
            'listing_type': self.listing_type.value,
            'status': self.status.value,
            'address': self.address,
            'city': self.city,
            'price': float(self.price),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Property {self.title}>'
