from decimal import Decimal
from unittest.mock import patch

import pytest

from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models import (
    GuestContact,
    ListingType,
    PropertyStatus,
    Reservation,
    ReservationStatus,
    UserRef,
)
from app.models.reservation import INVALID_GUEST_EMAIL, INVALID_GUEST_NAME, INVALID_GUEST_PHONE
from app.services import email_service
from app.services.availability_service import AvailabilityService, DATES_BLOCKED, DATES_BOOKED
from app.services.booking_service import (
    MISSING_GUEST_FIELDS,
    BookingService,
    ReservationRequest,
)
from app.services.email_service import EmailService, RESERVATION_CREATED
from app.utils.interval import DateInterval
from tests.helpers import days_from_today


GUEST = GuestContact(name='Ana Guest', email='ana@example.com', phone='+34600000000', country='Spain')
GUEST_2 = GuestContact(name='Bo Guest', email='bo@example.com', phone='+34600000001')


def _request(property_obj, a, b, contact=GUEST, **kwargs):
    return ReservationRequest(
        property_id=property_obj.id,
        interval=DateInterval(days_from_today(a), days_from_today(b)),
        contact=contact,
        **kwargs
    )


def test_guest_booking_is_priced_and_pending(rental):
    reservation = BookingService.create_reservation(_request(rental, 30, 33))

    assert reservation.id is not None
    assert reservation.nights == 3
    assert reservation.total_price == Decimal('2400')
    assert reservation.status == ReservationStatus.PENDING
    assert reservation.identity == GUEST
    assert reservation.user_id is None


def test_overlapping_booking_conflicts(rental):
    BookingService.create_reservation(_request(rental, 30, 33))

    with pytest.raises(ConflictError) as exc:
        BookingService.create_reservation(_request(rental, 32, 34, contact=GUEST_2))

    assert exc.value.message == DATES_BOOKED
    assert Reservation.query.count() == 1


def test_booking_then_checking_same_dates(rental):
    reservation = BookingService.create_reservation(_request(rental, 30, 33))

    result = AvailabilityService.check_availability(rental.id, reservation.interval)
    assert result.available is False
    assert result.reason == DATES_BOOKED


def test_blocked_dates_refuse_booking(rental, make_blocked):
    make_blocked(rental, days_from_today(40), days_from_today(44))

    with pytest.raises(ConflictError, match=DATES_BLOCKED):
        BookingService.create_reservation(_request(rental, 43, 46))


def test_start_in_past_is_invalid(rental):
    with pytest.raises(ValidationError, match='start in past'):
        BookingService.create_reservation(_request(rental, -1, 3))


def test_past_start_wins_over_reversed_dates(rental):
    with pytest.raises(ValidationError, match='start in past'):
        BookingService.create_reservation(_request(rental, -1, -3))


def test_end_before_start_is_invalid(rental):
    with pytest.raises(ValidationError, match='end before start'):
        BookingService.create_reservation(_request(rental, 5, 5))


@pytest.mark.parametrize('contact', [
    GuestContact(),
    GuestContact(name='Ana', email='ana@example.com'),
    GuestContact(email='ana@example.com', phone='+34600000000'),
])
def test_anonymous_guest_needs_contact_details(rental, contact):
    with pytest.raises(ValidationError, match=MISSING_GUEST_FIELDS):
        BookingService.create_reservation(_request(rental, 30, 33, contact=contact))


@pytest.mark.parametrize('contact,reason', [
    (GuestContact(name='A', email='ana@example.com', phone='+34600000000'), INVALID_GUEST_NAME),
    (GuestContact(name='Ana', email='not-an-email', phone='+34600000000'), INVALID_GUEST_EMAIL),
    (GuestContact(name='Ana', email='ana@example.com', phone='123'), INVALID_GUEST_PHONE),
])
def test_malformed_guest_contact(rental, contact, reason):
    with pytest.raises(ValidationError, match=reason):
        BookingService.create_reservation(_request(rental, 30, 33, contact=contact))

    assert Reservation.query.count() == 0


def test_registered_user_supplied_phone_is_checked(rental, make_user):
    user = make_user()

    with pytest.raises(ValidationError, match=INVALID_GUEST_PHONE):
        BookingService.create_reservation(
            _request(rental, 30, 32, contact=GuestContact(phone='12')), requesting_user_id=user.id
        )


def test_unknown_property(app):
    request = ReservationRequest(
        property_id=123,
        interval=DateInterval(days_from_today(30), days_from_today(33)),
        contact=GUEST,
    )
    with pytest.raises(NotFoundError):
        BookingService.create_reservation(request)


@pytest.mark.parametrize('listing_type,status', [
    (ListingType.SALE, PropertyStatus.AVAILABLE),
    (ListingType.RENT, PropertyStatus.INACTIVE),
])
def test_property_must_be_bookable(make_property, listing_type, status):
    property_obj = make_property(listing_type=listing_type, status=status)

    with pytest.raises(ValidationError):
        BookingService.create_reservation(_request(property_obj, 30, 33))


def test_registered_user_contact_is_backfilled(rental, make_user):
    user = make_user()
    contact = GuestContact(phone='+34999999999')

    reservation = BookingService.create_reservation(
        _request(rental, 30, 32, contact=contact), requesting_user_id=user.id
    )

    assert reservation.identity == UserRef(user.id)
    assert reservation.guest_name == user.name
    assert reservation.guest_email == user.email
    assert reservation.guest_phone == '+34999999999'
    assert reservation.guest_country == user.country


def test_registered_user_needs_no_contact(rental, make_user):
    user = make_user(phone=None)

    reservation = BookingService.create_reservation(
        _request(rental, 30, 32, contact=GuestContact()), requesting_user_id=user.id
    )
    assert reservation.guest_phone is None


def test_unknown_requesting_user(rental):
    with pytest.raises(NotFoundError):
        BookingService.create_reservation(_request(rental, 30, 32), requesting_user_id=999)


def test_price_is_a_snapshot(rental, db):
    reservation = BookingService.create_reservation(_request(rental, 30, 32))

    rental.price = Decimal('1000')
    db.session.commit()

    assert db.session.get(Reservation, reservation.id).total_price == Decimal('1600')


def test_notification_sent(rental):
    with patch.object(EmailService, 'notify') as notify:
        reservation = BookingService.create_reservation(_request(rental, 30, 32))

    event, payload = notify.call_args[0]
    assert event == RESERVATION_CREATED
    assert payload['reservation']['id'] == reservation.id
    assert payload['property']['id'] == rental.id


def test_notification_failure_keeps_reservation(rental, monkeypatch, db):
    def explode(payload):
        raise RuntimeError('smtp down')

    monkeypatch.setitem(email_service._HANDLERS, RESERVATION_CREATED, explode)

    reservation = BookingService.create_reservation(_request(rental, 30, 32))

    assert db.session.get(Reservation, reservation.id) is not None


def test_number_of_guests_must_be_positive(rental):
    with pytest.raises(ValidationError):
        BookingService.create_reservation(_request(rental, 30, 32, number_of_guests=0))


def test_reschedule_keeps_nightly_price(rental, make_reservation, db):
    reservation = make_reservation(rental, days_from_today(30), days_from_today(32))
    rental.price = Decimal('950')
    db.session.commit()

    moved = BookingService.reschedule_reservation(
        reservation.id, DateInterval(days_from_today(31), days_from_today(35))
    )

    assert moved.nights == 4
    assert moved.total_price == Decimal('3200')


def test_reschedule_conflicts_with_other_bookings(rental, make_reservation):
    reservation = make_reservation(rental, days_from_today(30), days_from_today(32))
    make_reservation(rental, days_from_today(40), days_from_today(42))

    with pytest.raises(ConflictError, match=DATES_BOOKED):
        BookingService.reschedule_reservation(
            reservation.id, DateInterval(days_from_today(38), days_from_today(41))
        )


def test_cancelled_reservation_cannot_be_rescheduled(rental, make_reservation):
    reservation = make_reservation(
        rental, days_from_today(30), days_from_today(32), status=ReservationStatus.CANCELLED
    )

    with pytest.raises(ConflictError):
        BookingService.reschedule_reservation(
            reservation.id, DateInterval(days_from_today(50), days_from_today(52))
        )


def test_delete_reservation(rental, make_reservation, db):
    reservation = make_reservation(rental, days_from_today(30), days_from_today(32))

    BookingService.delete_reservation(reservation.id)

    assert db.session.get(Reservation, reservation.id) is None
    with pytest.raises(NotFoundError):
        BookingService.delete_reservation(reservation.id)
