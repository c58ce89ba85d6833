from datetime import timedelta

from betterplay.config import Config
from betterplay.errors import ValidationError
from betterplay.models import TimeSlot, Booking
from betterplay.services.slot_generator import (
    generate_slots, hours_for_date, index_bookings, persisted_slot_view,
)
from betterplay.services.venue_service import VenueService, venue_today
from betterplay.utils.time_utils import parse_date, date_range


class AvailabilityService:

    @staticmethod
    def resolve_dates(date=None, start_date=None, end_date=None):
        """
        Target dates for a listing: a single `date`, an inclusive
        [start_date, end_date] range, or the default window from today.
        """
        if date:
            return [parse_date(date)]

        if start_date or end_date:
            if not (start_date and end_date):
                raise ValidationError("startDate and endDate must be provided together")
            first = parse_date(start_date, 'startDate')
            last = parse_date(end_date, 'endDate')
            if last < first:
                raise ValidationError("endDate must be on or after startDate")
            if (last - first).days + 1 > Config.MAX_RANGE_DAYS:
                raise ValidationError(f"Date range cannot exceed {Config.MAX_RANGE_DAYS} days")
            return list(date_range(first, last))

        today = venue_today()
        return [today + timedelta(days=i) for i in range(Config.AVAILABILITY_WINDOW_DAYS)]

    @staticmethod
    def get_availability(venue_id, space_id, date=None, start_date=None, end_date=None):
        venue, space = VenueService.get_venue_and_space(venue_id, space_id)
        days = AvailabilityService.resolve_dates(date, start_date, end_date)
        date_strings = [d.isoformat() for d in days]

        # Two bulk queries regardless of how many days are requested
        bookings = Booking.query.filter(
            Booking.venue_id == venue.id,
            Booking.space_id == space.id,
            Booking.date.in_(date_strings),
            Booking.status != 'cancelled'
        ).all()
        persisted = TimeSlot.query.filter(
            TimeSlot.venue_id == venue.id,
            TimeSlot.space_id == space.id,
            TimeSlot.date.in_(date_strings),
            TimeSlot.is_active == True
        ).all()

        bookings_index = index_bookings(bookings)
        slots_by_date = {}
        for slot in persisted:
            slots_by_date.setdefault(slot.date, []).append(slot)

        slots = []
        for day, date_str in zip(days, date_strings):
            day_slots = slots_by_date.get(date_str, [])
            day_bookings = [b for b in bookings if b.date == date_str]

            slots.extend(generate_slots(
                date_str,
                hours_for_date(venue.operating_hours, day),
                day_slots,
                day_bookings,
                price=Config.DEFAULT_SLOT_PRICE
            ))
            slots.extend(persisted_slot_view(s, bookings_index) for s in day_slots)

        slots.sort(key=lambda s: (s['date'], s['startTime']))

        return {
            'venueId': venue.id,
            'spaceId': space.id,
            'spaceName': space.name,
            'slots': slots
        }
