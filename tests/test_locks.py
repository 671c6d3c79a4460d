import pytest

from app.exceptions import ConflictError
from app.models import GuestContact, Reservation
from app.services import locks
from app.services.availability_service import DATES_BOOKED
from app.services.blocked_date_service import RESERVATION_OVERLAP, BlockedDateService
from app.services.booking_service import BookingService, ReservationRequest
from app.utils.interval import DateInterval
from tests.helpers import days_from_today, start_in_app_thread


GUEST = GuestContact(name='Ana Guest', email='ana@example.com', phone='+34600000000')

# Long enough for an unserialized writer to finish
WAIT = 0.3


def _iv(a, b):
    return DateInterval(days_from_today(a), days_from_today(b))


def test_one_lock_per_property():
    assert locks._lock_for(1) is locks._lock_for(1)
    assert locks._lock_for(1) is not locks._lock_for(2)


def test_lock_yields_property_or_none(rental):
    with locks.property_lock(rental.id) as property_obj:
        assert property_obj.id == rental.id

    with locks.property_lock(9999) as missing:
        assert missing is None


def test_lock_is_released_on_error(rental):
    with pytest.raises(RuntimeError):
        with locks.property_lock(rental.id):
            raise RuntimeError('boom')

    assert not locks._lock_for(rental.id).locked()


def test_booking_waits_for_the_property_and_sees_the_earlier_write(app, rental, make_reservation):
    property_id = rental.id
    request = ReservationRequest(property_id=property_id, interval=_iv(30, 33), contact=GUEST)

    with locks._lock_for(property_id):
        worker, outcome = start_in_app_thread(app, lambda: BookingService.create_reservation(request))
        worker.join(WAIT)
        assert worker.is_alive()

        # Another writer commits the same window while the worker is parked
        make_reservation(rental, days_from_today(31), days_from_today(32))

    worker.join(5)
    assert not worker.is_alive()
    assert isinstance(outcome.get('error'), ConflictError)
    assert outcome['error'].message == DATES_BOOKED
    assert Reservation.query.count() == 1


def test_blocking_waits_for_an_in_flight_booking(app, rental, make_reservation):
    property_id = rental.id

    with locks._lock_for(property_id):
        worker, outcome = start_in_app_thread(
            app, lambda: BlockedDateService.create(property_id, _iv(40, 44))
        )
        worker.join(WAIT)
        assert worker.is_alive()

        make_reservation(rental, days_from_today(42), days_from_today(45))

    worker.join(5)
    assert isinstance(outcome.get('error'), ConflictError)
    assert outcome['error'].message == RESERVATION_OVERLAP
    assert BlockedDateService.list_for_property(property_id) == []


def test_blocked_range_update_waits_for_the_property(app, rental, make_blocked, make_reservation):
    property_id = rental.id
    blocked_id = make_blocked(rental, days_from_today(40), days_from_today(42)).id

    with locks._lock_for(property_id):
        worker, outcome = start_in_app_thread(
            app, lambda: BlockedDateService.update(blocked_id, end_date=days_from_today(50))
        )
        worker.join(WAIT)
        assert worker.is_alive()

        make_reservation(rental, days_from_today(47), days_from_today(48))

    worker.join(5)
    assert isinstance(outcome.get('error'), ConflictError)
    assert outcome['error'].message == RESERVATION_OVERLAP
