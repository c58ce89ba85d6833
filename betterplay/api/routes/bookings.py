from flask import Blueprint, request, jsonify
from betterplay.services.booking_service import BookingService
from betterplay.utils.decorators import token_required, admin_required

bookings_bp = Blueprint('bookings', __name__)

@bookings_bp.route('/venues/<int:venue_id>/spaces/<space_id>/book', methods=['POST'])
@token_required
def create_booking(current_user, venue_id, space_id):
    data = request.get_json(silent=True) or {}
    booking = BookingService.create_booking(
        user=current_user,
        venue_id=venue_id,
        space_id=space_id,
        date=data.get('date'),
        start_time=data.get('startTime'),
        end_time=data.get('endTime'),
        event_name=data.get('eventName'),
        notes=data.get('notes')
    )
    return jsonify(booking.to_dict()), 201

@bookings_bp.route('/bookings/my_bookings', methods=['GET'])
@token_required
def get_my_bookings(current_user):
    include_past = request.args.get('includePast', 'false').lower() == 'true'
    bookings = BookingService.get_user_bookings(current_user.id, include_past=include_past)
    return jsonify([b.to_dict() for b in bookings])

@bookings_bp.route('/bookings/<int:booking_id>/cancel', methods=['PATCH'])
@token_required
def cancel_booking(current_user, booking_id):
    booking = BookingService.cancel_booking(booking_id, current_user)
    return jsonify({'message': 'Booking cancelled successfully.', 'booking': booking.to_dict()}), 200

@bookings_bp.route('/bookings/<int:booking_id>/status', methods=['PATCH'])
@token_required
@admin_required
def update_booking_status(current_user, booking_id):
    data = request.get_json(silent=True) or {}
    booking = BookingService.update_status(booking_id, data.get('status'))
    return jsonify({'message': 'Booking updated', 'booking': booking.to_dict()}), 200
