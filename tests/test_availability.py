from datetime import timedelta

import pytest

from betterplay.errors import NotFoundError, ValidationError
from betterplay.services.availability_service import AvailabilityService
from betterplay.services.booking_service import BookingService
from betterplay.services.slot_service import SlotService
from betterplay.services.venue_service import venue_today
from conftest import MONDAY, TUESDAY, SUNDAY

def listing(venue, **kwargs):
    return AvailabilityService.get_availability(venue.id, 'court-1', **kwargs)

def test_booking_then_relisting(app, init_data):
    _, user, _, venue = init_data

    result = listing(venue, date=MONDAY)
    assert result['venueId'] == venue.id
    assert result['spaceId'] == 'court-1'
    assert result['spaceName'] == 'Court 1'
    assert [(s['startTime'], s['endTime'], s['available']) for s in result['slots']] == [
        ('09:00', '10:00', True), ('10:00', '11:00', True), ('11:00', '12:00', True)
    ]

    booking = BookingService.create_booking(user, venue.id, 'court-1', MONDAY, '10:00', '11:00', 'Pickup game')

    slots = listing(venue, date=MONDAY)['slots']
    assert [s['available'] for s in slots] == [True, False, True]
    assert slots[1]['bookedBy'] == user.id
    assert slots[1]['bookedByUsername'] == 'test'
    assert slots[1]['bookingId'] == booking.id
    assert slots[1]['eventName'] == 'Pickup game'
    assert slots[0]['bookedBy'] is None

def test_cancelled_booking_does_not_occupy(app, init_data):
    _, user, _, venue = init_data
    booking = BookingService.create_booking(user, venue.id, 'court-1', MONDAY, '10:00', '11:00', 'Game')
    BookingService.cancel_booking(booking.id, user)
    assert all(s['available'] for s in listing(venue, date=MONDAY)['slots'])

def test_custom_slots_take_precedence_and_sort(app, init_data):
    admin, user, _, venue = init_data
    custom = SlotService.create_custom_slot(venue.id, 'court-1', MONDAY, '10:30', '11:15', 99, admin.id)
    BookingService.create_booking(user, venue.id, 'court-1', MONDAY, '10:30', '11:15', 'Drills')

    slots = listing(venue, date=MONDAY)['slots']
    assert [s['startTime'] for s in slots] == ['09:00', '10:30']
    assert slots[1]['id'] == custom.id
    assert slots[1]['isCustom'] is True
    assert slots[1]['price'] == 99
    assert slots[1]['available'] is False

def test_materialized_slots_are_not_duplicated(app, init_data):
    admin, _, _, venue = init_data
    SlotService.bulk_generate_slots(venue.id, 'court-1', MONDAY, MONDAY, 80, admin.id)

    slots = listing(venue, date=MONDAY)['slots']
    assert [s['startTime'] for s in slots] == ['09:00', '10:00', '11:00']
    assert all(s['price'] == 80 and s['isCustom'] is False for s in slots)
    assert all(isinstance(s['id'], int) for s in slots)

def test_inactive_slot_falls_back_to_generated(app, init_data):
    admin, _, _, venue = init_data
    slot = SlotService.create_custom_slot(venue.id, 'court-1', MONDAY, '09:00', '12:00', 500, admin.id)
    SlotService.update_custom_slot(venue.id, 'court-1', slot.id, is_active=False)
    assert len(listing(venue, date=MONDAY)['slots']) == 3

def test_date_range(app, init_data):
    _, _, _, venue = init_data
    slots = listing(venue, start_date=SUNDAY, end_date=TUESDAY)['slots']
    assert len(slots) == 3 + 7
    assert slots == sorted(slots, key=lambda s: (s['date'], s['startTime']))
    assert {s['date'] for s in slots} == {MONDAY, TUESDAY}

def test_default_window_starts_today(app, init_data):
    days = AvailabilityService.resolve_dates()
    assert len(days) == 14
    assert days[0] == venue_today()
    assert days[-1] == venue_today() + timedelta(days=13)

@pytest.mark.parametrize('kwargs', [
    {'date': '2030/01/07'},
    {'start_date': MONDAY},
    {'start_date': TUESDAY, 'end_date': MONDAY},
    {'start_date': '2030-01-01', 'end_date': '2031-01-01'},
])
def test_bad_ranges(app, init_data, kwargs):
    _, _, _, venue = init_data
    with pytest.raises(ValidationError):
        listing(venue, **kwargs)

def test_unknown_space(app, init_data):
    _, _, _, venue = init_data
    with pytest.raises(NotFoundError):
        AvailabilityService.get_availability(venue.id, 'pool', date=MONDAY)
