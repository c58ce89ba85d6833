from flask import Blueprint, request, jsonify
from betterplay.services.venue_service import VenueService
from betterplay.services.booking_service import BookingService
from betterplay.utils.decorators import token_required, admin_required

venues_bp = Blueprint('venues', __name__)

@venues_bp.route('', methods=['GET'])
def list_venues():
    venues = VenueService.list_venues(city=request.args.get('city'), venue_type=request.args.get('type'))
    return jsonify([v.to_dict() for v in venues]), 200

@venues_bp.route('/<int:venue_id>', methods=['GET'])
def get_venue(venue_id):
    return jsonify(VenueService.get_venue(venue_id).to_dict()), 200

@venues_bp.route('', methods=['POST'])
@token_required
@admin_required
def create_venue(current_user):
    venue = VenueService.create_venue(request.get_json(silent=True))
    return jsonify({'message': 'Venue created', 'venue': venue.to_dict()}), 201

@venues_bp.route('/<int:venue_id>', methods=['PUT'])
@token_required
@admin_required
def update_venue(current_user, venue_id):
    venue = VenueService.update_venue(venue_id, request.get_json(silent=True))
    return jsonify({'message': 'Venue updated', 'venue': venue.to_dict()}), 200

@venues_bp.route('/<int:venue_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_venue(current_user, venue_id):
    # Soft delete: bookings and slots keep pointing at the venue
    VenueService.deactivate_venue(venue_id)
    return jsonify({'message': 'Venue deactivated'}), 200

@venues_bp.route('/<int:venue_id>/spaces', methods=['POST'])
@token_required
@admin_required
def add_space(current_user, venue_id):
    space = VenueService.add_space(venue_id, request.get_json(silent=True))
    return jsonify({'message': 'Space created', 'space': space.to_dict()}), 201

@venues_bp.route('/<int:venue_id>/spaces/<space_id>', methods=['DELETE'])
@token_required
@admin_required
def remove_space(current_user, venue_id, space_id):
    VenueService.remove_space(venue_id, space_id)
    return jsonify({'message': 'Space deleted'}), 200

@venues_bp.route('/<int:venue_id>/bookings', methods=['GET'])
@token_required
@admin_required
def venue_bookings(current_user, venue_id):
    bookings = BookingService.get_venue_bookings(
        venue_id,
        date=request.args.get('date'),
        status=request.args.get('status')
    )
    return jsonify([b.to_dict() for b in bookings]), 200
