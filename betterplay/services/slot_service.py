import logging

from sqlalchemy.exc import IntegrityError

from betterplay.config import Config
from betterplay.errors import ValidationError, NotFoundError, ConflictError
from betterplay.extensions import db
from betterplay.models import TimeSlot, Booking
from betterplay.services.slot_generator import (
    effective_hours, has_operating_hours, hours_for_date, intervals_overlap,
)
from betterplay.services.venue_service import VenueService
from betterplay.utils.time_utils import (
    normalize_24h_time, parse_date, date_range, to_minutes, format_minutes,
)

logger = logging.getLogger(__name__)


class SlotService:

    @staticmethod
    def has_overlap(venue_id, space_id, date, start_time, end_time, exclude_slot_id=None):
        """Check if [start_time, end_time) collides with another active slot."""
        query = TimeSlot.query.filter(
            TimeSlot.venue_id == venue_id,
            TimeSlot.space_id == space_id,
            TimeSlot.date == date,
            TimeSlot.is_active == True
        )
        if exclude_slot_id is not None:
            query = query.filter(TimeSlot.id != exclude_slot_id)

        start = to_minutes(start_time)
        end = to_minutes(end_time)
        for slot in query.all():
            if intervals_overlap(start, end, to_minutes(slot.start_time), to_minutes(slot.end_time)):
                return True
        return False

    @staticmethod
    def active_booking_for(venue_id, space_id, date, start_time):
        return Booking.query.filter(
            Booking.venue_id == venue_id,
            Booking.space_id == space_id,
            Booking.date == date,
            Booking.start_time == start_time,
            Booking.status != 'cancelled'
        ).first()

    @staticmethod
    def overlapping_booking(venue_id, space_id, date, start_time, end_time):
        """
        Live booking whose interval intersects [start_time, end_time), if any.
        A booking that exactly matches the interval is the slot's own occupant
        and is not reported.
        """
        bookings = Booking.query.filter(
            Booking.venue_id == venue_id,
            Booking.space_id == space_id,
            Booking.date == date,
            Booking.status != 'cancelled'
        ).all()

        start = to_minutes(start_time)
        end = to_minutes(end_time)
        for booking in bookings:
            if (booking.start_time, booking.end_time) == (start_time, end_time):
                continue
            if intervals_overlap(start, end, to_minutes(booking.start_time), to_minutes(booking.end_time)):
                return booking
        return None

    @staticmethod
    def parse_price(price):
        if price is None:
            price = Config.DEFAULT_SLOT_PRICE
        if isinstance(price, bool):
            raise ValidationError("Price must be a number")
        try:
            price = float(price)
        except (TypeError, ValueError):
            raise ValidationError("Price must be a number")
        if price < 0:
            raise ValidationError("Price cannot be negative")
        return price

    @staticmethod
    def validate_slot_fields(date, start_time, end_time, price):
        """Normalize and check one slot definition; returns (date, start, end, price)."""
        parse_date(date)
        start_time = normalize_24h_time(start_time, 'startTime')
        end_time = normalize_24h_time(end_time, 'endTime')

        if to_minutes(end_time) <= to_minutes(start_time):
            raise ValidationError("End time must be after start time")

        return date, start_time, end_time, SlotService.parse_price(price)

    @staticmethod
    def _commit_or_conflict(message):
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError(message)

    @staticmethod
    def get_slot(venue_id, space_id, slot_id):
        slot = db.session.get(TimeSlot, slot_id)
        if not slot or slot.venue_id != venue_id or slot.space_id != space_id:
            raise NotFoundError("Time slot not found")
        return slot

    @staticmethod
    def create_custom_slot(venue_id, space_id, date, start_time, end_time, price, created_by):
        VenueService.get_venue_and_space(venue_id, space_id, active_only=False)
        date, start_time, end_time, price = SlotService.validate_slot_fields(date, start_time, end_time, price)

        if SlotService.has_overlap(venue_id, space_id, date, start_time, end_time):
            logger.info("Rejected slot %s %s-%s on venue %s/%s: overlap",
                        date, start_time, end_time, venue_id, space_id)
            raise ConflictError("Time slot overlaps with an existing slot")

        if SlotService.overlapping_booking(venue_id, space_id, date, start_time, end_time):
            logger.info("Rejected slot %s %s-%s on venue %s/%s: overlaps a booking",
                        date, start_time, end_time, venue_id, space_id)
            raise ConflictError("Time slot overlaps with an existing booking")

        slot = TimeSlot(
            venue_id=venue_id,
            space_id=space_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            price=price,
            is_custom=True,
            is_active=True,
            created_by=created_by
        )
        db.session.add(slot)
        SlotService._commit_or_conflict("A time slot already exists at this start time")
        logger.info("Created custom slot %s (%s %s-%s)", slot.id, date, start_time, end_time)
        return slot

    @staticmethod
    def update_custom_slot(venue_id, space_id, slot_id, date=None, start_time=None,
                           end_time=None, price=None, is_active=None):
        slot = SlotService.get_slot(venue_id, space_id, slot_id)

        if is_active is not None and not isinstance(is_active, bool):
            raise ValidationError("isActive must be true or false")

        new_date, new_start, new_end, new_price = SlotService.validate_slot_fields(
            date if date is not None else slot.date,
            start_time if start_time is not None else slot.start_time,
            end_time if end_time is not None else slot.end_time,
            price if price is not None else slot.price,
        )

        schedule_changed = (new_date, new_start, new_end) != (slot.date, slot.start_time, slot.end_time)
        if schedule_changed and SlotService.active_booking_for(venue_id, space_id, slot.date, slot.start_time):
            raise ConflictError("Cannot reschedule a slot that has an active booking")

        if is_active is not None and not is_active and slot.is_active:
            if SlotService.active_booking_for(venue_id, space_id, slot.date, slot.start_time):
                raise ConflictError("Cannot deactivate a slot that has an active booking")

        stays_active = slot.is_active if is_active is None else is_active
        if stays_active and SlotService.has_overlap(venue_id, space_id, new_date, new_start, new_end,
                                                    exclude_slot_id=slot.id):
            raise ConflictError("Time slot overlaps with an existing slot")

        reactivated = stays_active and not slot.is_active
        if (schedule_changed or reactivated) and stays_active and \
                SlotService.overlapping_booking(venue_id, space_id, new_date, new_start, new_end):
            raise ConflictError("Time slot overlaps with an existing booking")

        slot.date = new_date
        slot.start_time = new_start
        slot.end_time = new_end
        slot.price = new_price
        slot.is_active = stays_active
        SlotService._commit_or_conflict("A time slot already exists at this start time")
        return slot

    @staticmethod
    def delete_custom_slot(venue_id, space_id, slot_id):
        slot = SlotService.get_slot(venue_id, space_id, slot_id)

        if SlotService.active_booking_for(venue_id, space_id, slot.date, slot.start_time):
            raise ConflictError("Cannot delete a slot that has an active booking")

        db.session.delete(slot)
        db.session.commit()
        logger.info("Deleted slot %s", slot_id)

    @staticmethod
    def bulk_generate_slots(venue_id, space_id, start_date, end_date, price, created_by):
        """
        Materialize hourly slots for every date in [start_date, end_date].

        Hours that collide with an existing slot are skipped, not fatal.
        Returns {'created': n, 'skipped': m, 'slots': [...]}.
        """
        venue, _ = VenueService.get_venue_and_space(venue_id, space_id, active_only=False)

        first = parse_date(start_date, 'startDate')
        last = parse_date(end_date, 'endDate')
        if last < first:
            raise ValidationError("endDate must be on or after startDate")
        if (last - first).days + 1 > Config.MAX_RANGE_DAYS:
            raise ValidationError(f"Date range cannot exceed {Config.MAX_RANGE_DAYS} days")

        if not has_operating_hours(venue.operating_hours):
            raise ValidationError("Venue has no operating hours configured")

        price = SlotService.parse_price(price)

        created = []
        skipped = 0
        for day in date_range(first, last):
            hours = hours_for_date(venue.operating_hours, day)
            if not hours:
                continue

            date_str = day.isoformat()
            open_hour, close_hour = effective_hours(hours)
            for hour in range(open_hour, close_hour):
                start_time = format_minutes(hour * 60)
                end_time = format_minutes((hour + 1) * 60)

                if SlotService.has_overlap(venue_id, space_id, date_str, start_time, end_time) or \
                        SlotService.overlapping_booking(venue_id, space_id, date_str, start_time, end_time):
                    skipped += 1
                    continue

                slot = TimeSlot(
                    venue_id=venue_id,
                    space_id=space_id,
                    date=date_str,
                    start_time=start_time,
                    end_time=end_time,
                    price=price,
                    is_custom=False,
                    is_active=True,
                    created_by=created_by
                )
                db.session.add(slot)
                try:
                    db.session.commit()
                except IntegrityError:
                    # Inactive slot or a concurrent writer already holds this start time
                    db.session.rollback()
                    skipped += 1
                    continue
                created.append(slot)

        logger.info("Generated slots for venue %s/%s %s..%s: %d created, %d skipped",
                    venue_id, space_id, start_date, end_date, len(created), skipped)
        return {
            'created': len(created),
            'skipped': skipped,
            'slots': [s.to_dict() for s in created]
        }
