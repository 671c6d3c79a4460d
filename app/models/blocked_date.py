from extensions import db
from datetime import datetime

from app.utils.interval import DateInterval


class BlockedDate(db.Model):
    """Date range when a property cannot be booked (maintenance, owner hold)"""
    __tablename__ = 'blocked_dates'

    id = db.Column(db.Integer, primary_key=True)
    property_id = db.Column(db.Integer, db.ForeignKey('properties.id'), nullable=False, index=True)
    start_date = db.Column(db.Date, nullable=False, index=True)
    end_date = db.Column(db.Date, nullable=False, index=True)
    reason = db.Column(db.String(255))  # Optional: why it's blocked
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def interval(self):
        return DateInterval(self.start_date, self.end_date)

    def to_dict(self):
        return {
            'id': self.id,
            'property_id': self.property_id,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'reason': self.reason,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<BlockedDate {self.start_date}..{self.end_date} - Property {self.property_id}>'
