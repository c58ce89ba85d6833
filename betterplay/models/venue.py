from betterplay.extensions import db
from datetime import datetime

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

class Venue(db.Model):
    __tablename__ = 'venues'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    type = db.Column(db.String(64), nullable=False)

    street = db.Column(db.String(128))
    city = db.Column(db.String(64), index=True)
    state = db.Column(db.String(64), index=True)
    zip_code = db.Column(db.String(16))
    country = db.Column(db.String(64))

    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)

    amenities = db.Column(db.JSON, default=list) # e.g. ["parking", "showers"]
    contact_email = db.Column(db.String(120))
    contact_phone = db.Column(db.String(32))
    website = db.Column(db.String(255))

    # {"monday": {"open": "09:00", "close": "17:00"}, "sunday": None, ...}
    operating_hours = db.Column(db.JSON, nullable=True)
    is_active = db.Column(db.Boolean, default=True, index=True)

    spaces = db.relationship('Space', backref='venue', lazy=True,
                             cascade='all, delete-orphan', order_by='Space.id')

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def get_space(self, space_id):
        for space in self.spaces:
            if space.id == space_id:
                return space
        return None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'address': {
                'street': self.street,
                'city': self.city,
                'state': self.state,
                'zipCode': self.zip_code,
                'country': self.country
            },
            'coordinates': {
                'latitude': self.latitude,
                'longitude': self.longitude
            },
            'amenities': self.amenities or [],
            'contactEmail': self.contact_email,
            'contactPhone': self.contact_phone,
            'website': self.website,
            'operatingHours': self.operating_hours,
            'isActive': self.is_active,
            'spaces': [s.to_dict() for s in self.spaces]
        }

class Space(db.Model):
    """A bookable sub-area of a venue (court, hall, field...)."""
    __tablename__ = 'spaces'

    venue_id = db.Column(db.Integer, db.ForeignKey('venues.id'), primary_key=True)
    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    type = db.Column(db.String(64), nullable=False)
    capacity = db.Column(db.Integer, nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'capacity': self.capacity
        }
