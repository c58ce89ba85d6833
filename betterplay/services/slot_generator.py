"""Hourly slot generation from a venue's operating hours.

Pure functions: no database access, identical input gives identical output.
Persisted slots (admin custom slots or materialized ones) are passed in and
always win over the generated hours they touch.
"""
from betterplay.config import Config
from betterplay.models.venue import WEEKDAYS
from betterplay.utils.time_utils import parse_time_of_day, to_minutes, format_minutes, weekday_name


def hours_for_date(operating_hours, day):
    """Return the {open, close} entry for the weekday of `day`, or None if closed."""
    if not operating_hours:
        return None
    return operating_hours.get(weekday_name(day))


def has_operating_hours(operating_hours) -> bool:
    if not operating_hours:
        return False
    return any(operating_hours.get(day) for day in WEEKDAYS)


def effective_hours(hours):
    """
    First and last-exclusive bookable hour for one day.

    A partial opening hour rounds up (09:30 opens at 10:00); a partial
    closing hour is dropped (17:45 closes at 17:00).
    """
    opening = parse_time_of_day(hours['open'])
    closing = parse_time_of_day(hours['close'])

    open_hour = opening.hour + 1 if opening.minute else opening.hour
    return open_hour, closing.hour


def intervals_overlap(start_a, end_a, start_b, end_b) -> bool:
    # Half-open intervals: touching endpoints are not an overlap
    return start_a < end_b and end_a > start_b


def index_bookings(bookings):
    """Map (date, start_time) -> booking for quick occupancy lookups."""
    return {(b.date, b.start_time): b for b in bookings}


def booking_fields(booking):
    if booking is None:
        return {
            'available': True,
            'eventName': None,
            'bookedBy': None,
            'bookedByUsername': None,
            'bookingId': None,
        }
    user = getattr(booking, 'user', None)
    return {
        'available': False,
        'eventName': booking.event_name,
        'bookedBy': booking.user_id,
        'bookedByUsername': user.username if user is not None else booking.user_name,
        'bookingId': booking.id,
    }


def generate_slots(date_str, hours, custom_slots, bookings=(), price=None):
    """
    Build the auto-generated hourly slots for `date_str`.

    `hours` is the day's {open, close} entry (None when closed),
    `custom_slots` any persisted slots (only those on `date_str` are
    considered) and `bookings` the live bookings to mark occupancy from.
    """
    if price is None:
        price = Config.DEFAULT_SLOT_PRICE

    if not hours:
        return []

    open_hour, close_hour = effective_hours(hours)

    custom_intervals = [
        (to_minutes(s.start_time), to_minutes(s.end_time))
        for s in custom_slots
        if s.date == date_str
    ]
    occupied = index_bookings(bookings)

    slots = []
    for hour in range(open_hour, close_hour):
        start = hour * 60
        end = start + 60
        if any(intervals_overlap(start, end, c_start, c_end) for c_start, c_end in custom_intervals):
            continue

        start_time = format_minutes(start)
        slot = {
            'id': f"generated-{date_str}-{start_time}",
            'date': date_str,
            'startTime': start_time,
            'endTime': format_minutes(end),
            'price': price,
            'isCustom': False,
        }
        slot.update(booking_fields(occupied.get((date_str, start_time))))
        slots.append(slot)

    return slots


def persisted_slot_view(slot, bookings_index):
    """Availability view of a stored TimeSlot, annotated with its booking."""
    view = {
        'id': slot.id,
        'date': slot.date,
        'startTime': slot.start_time,
        'endTime': slot.end_time,
        'price': slot.price,
        'isCustom': slot.is_custom,
    }
    view.update(booking_fields(bookings_index.get((slot.date, slot.start_time))))
    return view
