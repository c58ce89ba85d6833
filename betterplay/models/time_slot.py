from betterplay.extensions import db
from datetime import datetime

class TimeSlot(db.Model):
    __tablename__ = 'time_slots'

    id = db.Column(db.Integer, primary_key=True)
    venue_id = db.Column(db.Integer, db.ForeignKey('venues.id'), nullable=False)
    space_id = db.Column(db.String(64), nullable=False)

    date = db.Column(db.String(10), nullable=False) # YYYY-MM-DD
    start_time = db.Column(db.String(5), nullable=False) # HH:MM (24hr)
    end_time = db.Column(db.String(5), nullable=False) # HH:MM (24hr)
    price = db.Column(db.Float, nullable=False, default=150)

    is_custom = db.Column(db.Boolean, default=True) # False = materialized by bulk generation
    is_active = db.Column(db.Boolean, default=True, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('venue_id', 'space_id', 'date', 'start_time', name='uq_time_slot_start'),
        db.Index('ix_time_slot_lookup', 'venue_id', 'space_id', 'date'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'venueId': self.venue_id,
            'spaceId': self.space_id,
            'date': self.date,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'price': self.price,
            'isCustom': self.is_custom,
            'isActive': self.is_active,
            'createdBy': self.created_by
        }
