from betterplay.extensions import db
from datetime import datetime

INQUIRY_STATUSES = ('new', 'contacted', 'resolved')

class Inquiry(db.Model):
    __tablename__ = 'inquiries'

    id = db.Column(db.Integer, primary_key=True)
    venue_id = db.Column(db.Integer, db.ForeignKey('venues.id'), nullable=False, index=True)
    space_id = db.Column(db.String(64), nullable=False)
    space_name = db.Column(db.String(128), nullable=False)

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    user_name = db.Column(db.String(64), nullable=False)
    user_email = db.Column(db.String(120), nullable=False)
    user_phone = db.Column(db.String(32))

    preferred_date = db.Column(db.String(10))
    preferred_time = db.Column(db.String(5))
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), default='new', nullable=False) # new, contacted, resolved

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'venueId': self.venue_id,
            'spaceId': self.space_id,
            'spaceName': self.space_name,
            'userId': self.user_id,
            'userName': self.user_name,
            'userEmail': self.user_email,
            'userPhone': self.user_phone,
            'preferredDate': self.preferred_date,
            'preferredTime': self.preferred_time,
            'message': self.message,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }
