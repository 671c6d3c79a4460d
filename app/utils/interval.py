"""
Date Interval
Day-granular date ranges used by reservations and blocked dates
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from app.exceptions import ValidationError


END_BEFORE_START = 'end before start'
START_IN_PAST = 'start in past'


def parse_date(value, field='date'):
    """Parse a date, datetime or ISO string into a date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            if len(value) == 10:
                return datetime.strptime(value, '%Y-%m-%d').date()
            # Full ISO timestamps are truncated to their calendar day
            return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
        except ValueError:
            pass
    raise ValidationError(f'Invalid {field}: {value!r}')


@dataclass(frozen=True)
class DateInterval:
    """Closed range of calendar days [start, end]"""

    start: date
    end: date

    @classmethod
    def parse(cls, start, end):
        return cls(parse_date(start, 'start date'), parse_date(end, 'end date'))

    def overlaps(self, other):
        """Boundaries are inclusive: a check-in on another stay's check-out day conflicts"""
        return overlaps(self, other)

    def contains_day(self, day):
        return contains_day(self, day)

    def expand_to_days(self):
        return expand_to_days(self)

    def within(self, other):
        """True when this interval lies entirely inside other"""
        return other.start <= self.start and self.end <= other.end

    @property
    def nights(self):
        return nights_between(self.start, self.end)

    def validate_for_booking(self, today=None):
        """Raise ValidationError unless start is not in the past and start < end"""
        if self.start < (today or date.today()):
            raise ValidationError(START_IN_PAST)
        if self.start >= self.end:
            raise ValidationError(END_BEFORE_START)

    def to_dict(self):
        return {
            'start_date': self.start.isoformat(),
            'end_date': self.end.isoformat(),
        }


def overlaps(a, b):
    return a.start <= b.end and a.end >= b.start


def contains_day(interval, day):
    return interval.start <= day <= interval.end


def expand_to_days(interval):
    """Every calendar day of the interval, both endpoints included"""
    span = (interval.end - interval.start).days
    return [interval.start + timedelta(days=offset) for offset in range(span + 1)]


def nights_between(start, end):
    # Whole days between two dates; datetimes round partial days up
    delta = end - start
    nights = delta.days
    if delta.seconds or delta.microseconds:
        nights += 1
    return nights
