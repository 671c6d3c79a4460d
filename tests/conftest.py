from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from extensions import db as _db
from app.models import (
    BlockedDate,
    ListingType,
    Property,
    PropertyStatus,
    Reservation,
    ReservationStatus,
    User,
)


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_property(db):
    def _make(price=800, listing_type=ListingType.RENT, status=PropertyStatus.AVAILABLE, title='Sea view flat'):
        property_obj = Property(
            title=title,
            price=Decimal(str(price)),
            listing_type=listing_type,
            status=status,
            city='Barcelona',
        )
        db.session.add(property_obj)
        db.session.commit()
        return property_obj
    return _make


@pytest.fixture
def rental(make_property):
    return make_property()


@pytest.fixture
def make_user(db):
    def _make(email='guest@example.com', name='Ana Guest', phone='+34600000000',
              country='Spain', is_admin=False):
        user = User(email=email, password='secret123', name=name, phone=phone,
                    country=country, is_admin=is_admin)
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def admin(make_user):
    return make_user(email='admin@example.com', name='Site Admin', is_admin=True)


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=str(user.id))
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def make_reservation(db):
    """Insert a reservation row directly, skipping booking validation"""
    def _make(property_obj, start, end, status=ReservationStatus.PENDING, user=None):
        reservation = Reservation(
            property_id=property_obj.id,
            user_id=user.id if user else None,
            guest_name='Stored Guest',
            guest_email='stored@example.com',
            guest_phone='+34611111111',
            start_date=start,
            end_date=end,
            price_per_night=property_obj.price,
            status=status,
        )
        reservation.calculate_price()
        db.session.add(reservation)
        db.session.commit()
        return reservation
    return _make


@pytest.fixture
def make_blocked(db):
    """Insert a blocked range directly, skipping overlap validation"""
    def _make(property_obj, start, end, reason=None):
        blocked = BlockedDate(property_id=property_obj.id, start_date=start, end_date=end, reason=reason)
        db.session.add(blocked)
        db.session.commit()
        return blocked
    return _make
