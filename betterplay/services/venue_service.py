import logging
from datetime import datetime

import pytz

from betterplay.config import Config
from betterplay.errors import ValidationError, NotFoundError, ConflictError
from betterplay.extensions import db
from betterplay.models import Venue, Space, Booking, WEEKDAYS
from betterplay.utils.time_utils import to_minutes

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = {
    'street': 'street',
    'city': 'city',
    'state': 'state',
    'zipCode': 'zip_code',
    'country': 'country',
}

CONTACT_FIELDS = {
    'name': 'name',
    'type': 'type',
    'amenities': 'amenities',
    'contactEmail': 'contact_email',
    'contactPhone': 'contact_phone',
    'website': 'website',
    'isActive': 'is_active',
}


def venue_today():
    """Today's date in the venues' timezone."""
    return datetime.now(pytz.timezone(Config.VENUE_TIMEZONE)).date()


class VenueService:

    @staticmethod
    def get_venue(venue_id, active_only=True):
        venue = db.session.get(Venue, venue_id)
        if not venue or (active_only and not venue.is_active):
            raise NotFoundError("Venue not found")
        return venue

    @staticmethod
    def get_venue_and_space(venue_id, space_id, active_only=True):
        venue = VenueService.get_venue(venue_id, active_only=active_only)
        space = venue.get_space(space_id)
        if not space:
            raise NotFoundError("Space not found")
        return venue, space

    @staticmethod
    def list_venues(city=None, venue_type=None):
        query = Venue.query.filter(Venue.is_active == True)
        if city:
            query = query.filter(Venue.city == city)
        if venue_type:
            query = query.filter(Venue.type == venue_type)
        return query.order_by(Venue.name).all()

    @staticmethod
    def validate_operating_hours(operating_hours):
        """
        Check an operating-hours map and return it with only weekday keys.
        Each day is either null (closed) or {open, close} with close after open.
        """
        if operating_hours is None:
            return None
        if not isinstance(operating_hours, dict):
            raise ValidationError("operatingHours must be an object keyed by weekday")

        unknown = set(operating_hours) - set(WEEKDAYS)
        if unknown:
            raise ValidationError(f"Unknown weekday(s) in operatingHours: {', '.join(sorted(unknown))}")

        cleaned = {}
        for day in WEEKDAYS:
            hours = operating_hours.get(day)
            if not hours:
                cleaned[day] = None
                continue
            if not isinstance(hours, dict) or 'open' not in hours or 'close' not in hours:
                raise ValidationError(f"Operating hours for {day} need both open and close")
            if to_minutes(hours['close']) <= to_minutes(hours['open']):
                raise ValidationError(f"Closing time must be after opening time on {day}")
            cleaned[day] = {'open': hours['open'], 'close': hours['close']}
        return cleaned

    @staticmethod
    def _apply_fields(venue, data):
        for key, attr in CONTACT_FIELDS.items():
            if key in data:
                setattr(venue, attr, data[key])

        address = data.get('address') or {}
        for key, attr in ADDRESS_FIELDS.items():
            if key in address:
                setattr(venue, attr, address[key])

        coordinates = data.get('coordinates') or {}
        if 'latitude' in coordinates:
            venue.latitude = coordinates['latitude']
        if 'longitude' in coordinates:
            venue.longitude = coordinates['longitude']

        if 'operatingHours' in data:
            venue.operating_hours = VenueService.validate_operating_hours(data['operatingHours'])

    @staticmethod
    def create_venue(data):
        if not data or not data.get('name') or not data.get('type'):
            raise ValidationError("Venue name and type are required")

        venue = Venue()
        VenueService._apply_fields(venue, data)
        for space_data in data.get('spaces', []):
            venue.spaces.append(VenueService._build_space(venue, space_data))

        db.session.add(venue)
        db.session.commit()
        logger.info("Created venue %s (%s)", venue.id, venue.name)
        return venue

    @staticmethod
    def update_venue(venue_id, data):
        venue = VenueService.get_venue(venue_id, active_only=False)
        if not data:
            raise ValidationError("No input data provided")
        VenueService._apply_fields(venue, data)
        db.session.commit()
        return venue

    @staticmethod
    def deactivate_venue(venue_id):
        venue = VenueService.get_venue(venue_id, active_only=False)
        venue.is_active = False
        db.session.commit()
        logger.info("Deactivated venue %s", venue.id)
        return venue

    @staticmethod
    def _build_space(venue, data):
        if not data or not data.get('id') or not data.get('name') or not data.get('type'):
            raise ValidationError("Space id, name and type are required")
        if venue.get_space(data['id']):
            raise ConflictError(f"Space '{data['id']}' already exists for this venue")
        return Space(id=data['id'], name=data['name'], type=data['type'], capacity=data.get('capacity'))

    @staticmethod
    def add_space(venue_id, data):
        venue = VenueService.get_venue(venue_id, active_only=False)
        space = VenueService._build_space(venue, data)
        venue.spaces.append(space)
        db.session.commit()
        return space

    @staticmethod
    def remove_space(venue_id, space_id):
        venue, space = VenueService.get_venue_and_space(venue_id, space_id, active_only=False)

        upcoming = Booking.query.filter(
            Booking.venue_id == venue.id,
            Booking.space_id == space.id,
            Booking.status != 'cancelled',
            Booking.date >= venue_today().isoformat()
        ).count()
        if upcoming:
            raise ConflictError(f"Space has {upcoming} upcoming booking(s)")

        venue.spaces.remove(space)
        db.session.commit()
