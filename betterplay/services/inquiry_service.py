from betterplay.errors import ValidationError, NotFoundError
from betterplay.extensions import db
from betterplay.models import Inquiry, INQUIRY_STATUSES
from betterplay.services.notification_service import NotificationService
from betterplay.services.venue_service import VenueService
from betterplay.utils.time_utils import normalize_24h_time, parse_date


class InquiryService:

    @staticmethod
    def create_inquiry(user, venue_id, space_id, data):
        venue, space = VenueService.get_venue_and_space(venue_id, space_id)

        message = (data or {}).get('message')
        if not message:
            raise ValidationError("Message is required")

        preferred_date = data.get('preferredDate')
        if preferred_date:
            parse_date(preferred_date, 'preferredDate')
        preferred_time = data.get('preferredTime')
        if preferred_time:
            preferred_time = normalize_24h_time(preferred_time, 'preferredTime')

        inquiry = Inquiry(
            venue_id=venue.id,
            space_id=space.id,
            space_name=space.name,
            user_id=user.id,
            user_name=user.username,
            user_email=user.email,
            user_phone=data.get('userPhone'),
            preferred_date=preferred_date,
            preferred_time=preferred_time,
            message=message
        )
        db.session.add(inquiry)
        db.session.commit()

        NotificationService.send_to_users(
            NotificationService.admin_ids(),
            "New venue inquiry",
            f"{user.username} asked about {space.name} at {venue.name}",
            data={'inquiryId': inquiry.id, 'venueId': venue.id},
            notification_type='inquiry'
        )
        return inquiry

    @staticmethod
    def list_inquiries(status=None, user_id=None):
        query = Inquiry.query
        if status:
            if status not in INQUIRY_STATUSES:
                raise ValidationError(f"Status must be one of: {', '.join(INQUIRY_STATUSES)}")
            query = query.filter(Inquiry.status == status)
        if user_id is not None:
            query = query.filter(Inquiry.user_id == user_id)
        return query.order_by(Inquiry.created_at.desc()).all()

    @staticmethod
    def update_status(inquiry_id, status):
        if status not in INQUIRY_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(INQUIRY_STATUSES)}")
        inquiry = db.session.get(Inquiry, inquiry_id)
        if not inquiry:
            raise NotFoundError("Inquiry not found")
        inquiry.status = status
        db.session.commit()
        return inquiry
