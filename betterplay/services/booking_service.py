import logging

from sqlalchemy.exc import IntegrityError

from betterplay.errors import ValidationError, NotFoundError, ConflictError, ForbiddenError
from betterplay.extensions import db
from betterplay.models import Booking, BOOKING_STATUSES
from betterplay.services.notification_service import NotificationService
from betterplay.services.venue_service import VenueService, venue_today
from betterplay.utils.time_utils import normalize_24h_time, parse_date, to_minutes

logger = logging.getLogger(__name__)

# target status -> statuses it may be reached from
ALLOWED_TRANSITIONS = {
    'confirmed': ('pending',),
    'cancelled': ('pending', 'confirmed'),
}


class BookingService:

    @staticmethod
    def find_active_booking(venue_id, space_id, date, start_time):
        """
        Live booking holding this slot key, if any.
        Keyed on start time only: bookings mirror a single slot's duration.
        """
        return Booking.query.filter(
            Booking.venue_id == venue_id,
            Booking.space_id == space_id,
            Booking.date == date,
            Booking.start_time == start_time,
            Booking.status != 'cancelled'
        ).first()

    @staticmethod
    def get_booking(booking_id):
        booking = db.session.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    @staticmethod
    def create_booking(user, venue_id, space_id, date, start_time, end_time, event_name, notes=None):
        """
        Main entry point to book a slot.
        """
        missing = [name for name, value in (
            ('date', date), ('startTime', start_time), ('endTime', end_time), ('eventName', event_name)
        ) if not value]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        parse_date(date)
        start_time = normalize_24h_time(start_time, 'startTime')
        end_time = normalize_24h_time(end_time, 'endTime')
        if to_minutes(end_time) <= to_minutes(start_time):
            raise ValidationError("End time must be after start time")

        venue, space = VenueService.get_venue_and_space(venue_id, space_id)

        # Fast path; the partial unique index is what actually closes the race
        if BookingService.find_active_booking(venue.id, space.id, date, start_time):
            logger.info("Rejected booking %s %s on venue %s/%s: already booked",
                        date, start_time, venue.id, space.id)
            raise ConflictError("This time slot is already booked")

        booking = Booking(
            venue_id=venue.id,
            space_id=space.id,
            space_name=space.name,
            user_id=user.id,
            user_name=user.username,
            user_email=user.email,
            event_name=event_name,
            date=date,
            start_time=start_time,
            end_time=end_time,
            status='pending',
            notes=notes
        )
        db.session.add(booking)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("This time slot is already booked")

        logger.info("Booking %s created by user %s for %s %s", booking.id, user.id, date, start_time)
        NotificationService.send_to_users(
            NotificationService.admin_ids(),
            "New booking request",
            f"{user.username} requested {space.name} at {venue.name} on {date} {start_time}",
            data={'bookingId': booking.id, 'venueId': venue.id},
            notification_type='booking'
        )
        return booking

    @staticmethod
    def cancel_booking(booking_id, user):
        """Cancel a booking owned by `user` (admins may cancel any booking)."""
        booking = BookingService.get_booking(booking_id)

        if booking.user_id != user.id and not user.is_admin:
            raise ForbiddenError("You can only cancel your own bookings")

        if booking.status == 'cancelled':
            return booking

        booking.status = 'cancelled'
        db.session.commit()
        logger.info("Booking %s cancelled by user %s", booking.id, user.id)

        if booking.user_id != user.id:
            NotificationService.send_to_user(
                booking.user_id,
                "Booking cancelled",
                f"Your booking for {booking.event_name} on {booking.date} {booking.start_time} was cancelled",
                data={'bookingId': booking.id},
                notification_type='booking'
            )
        return booking

    @staticmethod
    def update_status(booking_id, status):
        if status not in BOOKING_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(BOOKING_STATUSES)}")

        booking = BookingService.get_booking(booking_id)
        if booking.status == status:
            return booking
        if booking.status not in ALLOWED_TRANSITIONS.get(status, ()):
            raise ConflictError(f"Cannot change booking from {booking.status} to {status}")

        booking.status = status
        db.session.commit()

        NotificationService.send_to_user(
            booking.user_id,
            f"Booking {status}",
            f"Your booking for {booking.event_name} on {booking.date} {booking.start_time} is {status}",
            data={'bookingId': booking.id, 'status': status},
            notification_type='booking'
        )
        return booking

    @staticmethod
    def get_user_bookings(user_id, include_past=False):
        """Get a user's live bookings, upcoming only by default."""
        query = Booking.query.filter(
            Booking.user_id == user_id,
            Booking.status != 'cancelled'
        )
        if not include_past:
            query = query.filter(Booking.date >= venue_today().isoformat())
        return query.order_by(Booking.date, Booking.start_time).all()

    @staticmethod
    def get_venue_bookings(venue_id, date=None, status=None):
        VenueService.get_venue(venue_id, active_only=False)
        query = Booking.query.filter(Booking.venue_id == venue_id)
        if date:
            parse_date(date)
            query = query.filter(Booking.date == date)
        if status:
            if status not in BOOKING_STATUSES:
                raise ValidationError(f"Status must be one of: {', '.join(BOOKING_STATUSES)}")
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.date, Booking.start_time).all()
