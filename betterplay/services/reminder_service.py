import logging
from datetime import datetime, timedelta

import pytz

from betterplay.config import Config
from betterplay.extensions import db
from betterplay.models import Booking
from betterplay.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class ReminderService:
    """
    Booking reminders, meant to be run periodically (see `flask send-reminders`).

    Each booking is reminded at most once: `reminded_at` is stored on the row,
    so a restart or a second worker never sends the same reminder twice.
    """

    @staticmethod
    def booking_start(booking, tz):
        naive = datetime.strptime(f"{booking.date} {booking.start_time}", "%Y-%m-%d %H:%M")
        return tz.localize(naive)

    @staticmethod
    def due_bookings(now, lead_minutes):
        tz = pytz.timezone(Config.VENUE_TIMEZONE)
        local_now = now.astimezone(tz)
        horizon = local_now + timedelta(minutes=lead_minutes)

        candidates = Booking.query.filter(
            Booking.status != 'cancelled',
            Booking.reminded_at == None,
            Booking.date >= local_now.date().isoformat(),
            Booking.date <= horizon.date().isoformat()
        ).all()

        return [
            b for b in candidates
            if local_now <= ReminderService.booking_start(b, tz) <= horizon
        ]

    @staticmethod
    def send_due_reminders(now=None, lead_minutes=None):
        """Notify owners of bookings starting within the lead window. Returns the count sent."""
        if now is None:
            now = datetime.now(pytz.utc)
        if lead_minutes is None:
            lead_minutes = Config.REMINDER_LEAD_MINUTES

        stamp = now.astimezone(pytz.utc).replace(tzinfo=None)
        sent = 0
        for booking in ReminderService.due_bookings(now, lead_minutes):
            booking_id = booking.id
            # Claim the row before sending; a concurrent run loses the claim
            claimed = Booking.query.filter(
                Booking.id == booking_id,
                Booking.reminded_at == None
            ).update({'reminded_at': stamp}, synchronize_session=False)
            db.session.commit()
            if claimed != 1:
                continue

            NotificationService.send_to_user(
                booking.user_id,
                "Upcoming booking",
                f"{booking.event_name} at {booking.space_name} starts at {booking.start_time}",
                data={'bookingId': booking_id, 'venueId': booking.venue_id},
                notification_type='event_reminder'
            )
            sent += 1

        if sent:
            logger.info("Sent %d booking reminder(s)", sent)
        return sent
