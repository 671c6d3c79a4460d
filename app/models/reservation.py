"""
Reservation Model
"""

from dataclasses import dataclass
from typing import Optional, Union

from email_validator import EmailNotValidError, validate_email
from extensions import db
from datetime import datetime
from enum import Enum

from app.exceptions import ValidationError
from app.utils.interval import DateInterval


INVALID_GUEST_NAME = 'Guest name must be at least 2 characters'
INVALID_GUEST_EMAIL = 'Valid email is required'
INVALID_GUEST_PHONE = 'Valid phone number is required'


class ReservationStatus(str, Enum):
    """Reservation status enum"""
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'

    @classmethod
    def parse(cls, value):
        """Accept either the value ('pending') or the name ('PENDING')"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for status in cls:
                if status.value == normalized:
                    return status
        raise ValueError(f'Unknown reservation status: {value!r}')


# PENDING and CONFIRMED reservations hold their dates
ACTIVE_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


@dataclass(frozen=True)
class GuestContact:
    """Contact details of an anonymous guest"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None

    def is_complete(self):
        return bool(self.name and self.email and self.phone)

    def validate(self):
        """Raise ValidationError for any supplied field that is malformed"""
        if self.name and len(self.name.strip()) < 2:
            raise ValidationError(INVALID_GUEST_NAME)
        if self.email:
            try:
                validate_email(self.email, check_deliverability=False)
            except EmailNotValidError:
                raise ValidationError(INVALID_GUEST_EMAIL)
        if self.phone and len(self.phone.strip()) < 10:
            raise ValidationError(INVALID_GUEST_PHONE)

    def merged_with(self, fallback):
        """Fill blanks from fallback without overriding supplied values"""
        return GuestContact(
            name=self.name or fallback.name,
            email=self.email or fallback.email,
            phone=self.phone or fallback.phone,
            country=self.country or fallback.country,
        )


@dataclass(frozen=True)
class UserRef:
    """Reference to a registered user"""
    id: int


BookingIdentity = Union[GuestContact, UserRef]


class Reservation(db.Model):
    """Reservation of a rental property for a range of days"""

    __tablename__ = 'reservations'

    id = db.Column(db.Integer, primary_key=True)
    property_id = db.Column(db.Integer, db.ForeignKey('properties.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    # Guest contact (filled from the user profile when booked by a registered user)
    guest_name = db.Column(db.String(100))
    guest_email = db.Column(db.String(255))
    guest_phone = db.Column(db.String(20))
    guest_country = db.Column(db.String(100))

    # Booking Details
    start_date = db.Column(db.Date, nullable=False, index=True)
    end_date = db.Column(db.Date, nullable=False, index=True)
    number_of_guests = db.Column(db.Integer)
    message = db.Column(db.Text)

    # Status
    status = db.Column(db.Enum(ReservationStatus), default=ReservationStatus.PENDING,
                       nullable=False, index=True)

    # Pricing snapshot taken at booking time
    nights = db.Column(db.Integer, nullable=False)
    price_per_night = db.Column(db.Numeric(12, 2), nullable=False)
    total_price = db.Column(db.Numeric(12, 2), nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __init__(self, **kwargs):
        """Initialize reservation"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    @property
    def interval(self):
        return DateInterval(self.start_date, self.end_date)

    @property
    def is_active(self):
        return self.status in ACTIVE_STATUSES

    @property
    def identity(self):
        """UserRef for account bookings, GuestContact otherwise"""
        if self.user_id is not None:
            return UserRef(self.user_id)
        return self.contact

    @property
    def contact(self):
        return GuestContact(
            name=self.guest_name,
            email=self.guest_email,
            phone=self.guest_phone,
            country=self.guest_country,
        )

    def apply_contact(self, contact):
        self.guest_name = contact.name
        self.guest_email = contact.email
        self.guest_phone = contact.phone
        self.guest_country = contact.country

    def calculate_price(self):
        """Recalculate nights and total from the snapshotted nightly price"""
        self.nights = self.interval.nights
        self.total_price = self.price_per_night * self.nights
        return self.total_price

    def to_dict(self, include_property=False):
        """Convert reservation to dictionary"""
        data = {
            'id': self.id,
            'property_id': self.property_id,
            'user_id': self.user_id,
            'guest_name': self.guest_name,
            'guest_email': self.guest_email,
            'guest_phone': self.guest_phone,
            'guest_country': self.guest_country,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'number_of_guests': self.number_of_guests,
            'message': self.message,
            'status': self.status.value,
            'nights': self.nights,
            'price_per_night': float(self.price_per_night),
            'total_price': float(self.total_price),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

        if include_property:
            data['property'] = self.property.to_dict()

        return data

    def __repr__(self):
        return f'<Reservation {self.id} - Property {self.property_id}>'
