from betterplay.models.user import User
from betterplay.models.venue import Venue, Space, WEEKDAYS
from betterplay.models.time_slot import TimeSlot
from betterplay.models.booking import Booking, BOOKING_STATUSES
from betterplay.models.inquiry import Inquiry, INQUIRY_STATUSES

__all__ = [
    "User", "Venue", "Space", "WEEKDAYS", "TimeSlot",
    "Booking", "BOOKING_STATUSES", "Inquiry", "INQUIRY_STATUSES",
]
