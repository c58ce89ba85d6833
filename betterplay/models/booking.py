from betterplay.extensions import db
from datetime import datetime

BOOKING_STATUSES = ('pending', 'confirmed', 'cancelled')

class Booking(db.Model):
    __tablename__ = 'bookings'

    id = db.Column(db.Integer, primary_key=True)
    venue_id = db.Column(db.Integer, db.ForeignKey('venues.id'), nullable=False)
    space_id = db.Column(db.String(64), nullable=False)
    space_name = db.Column(db.String(128), nullable=False)

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    user_name = db.Column(db.String(64), nullable=False)
    user_email = db.Column(db.String(120), nullable=False)
    event_name = db.Column(db.String(128), nullable=False)

    date = db.Column(db.String(10), nullable=False) # YYYY-MM-DD
    start_time = db.Column(db.String(5), nullable=False) # HH:MM (24hr)
    end_time = db.Column(db.String(5), nullable=False) # HH:MM (24hr)

    status = db.Column(db.String(20), default='pending', nullable=False) # pending, confirmed, cancelled
    notes = db.Column(db.Text)
    reminded_at = db.Column(db.DateTime, nullable=True)

    user = db.relationship('User', lazy=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Only one live booking per slot key; cancelled rows stay for history
    __table_args__ = (
        db.Index(
            'uq_booking_active_slot', 'venue_id', 'space_id', 'date', 'start_time',
            unique=True,
            sqlite_where=db.text("status != 'cancelled'"),
            postgresql_where=db.text("status != 'cancelled'"),
        ),
        db.Index('ix_booking_venue_date', 'venue_id', 'date'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'venueId': self.venue_id,
            'spaceId': self.space_id,
            'spaceName': self.space_name,
            'userId': self.user_id,
            'userName': self.user_name,
            'userEmail': self.user_email,
            'eventName': self.event_name,
            'date': self.date,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'status': self.status,
            'notes': self.notes,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }
