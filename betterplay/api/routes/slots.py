from flask import Blueprint, request, jsonify
from betterplay.errors import ValidationError
from betterplay.services.availability_service import AvailabilityService
from betterplay.services.slot_service import SlotService
from betterplay.utils.decorators import token_required, admin_required

slots_bp = Blueprint('slots', __name__)

def get_json_body():
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError('No input data provided')
    return data

@slots_bp.route('/<int:venue_id>/spaces/<space_id>/timeslots', methods=['GET'])
def list_timeslots(venue_id, space_id):
    result = AvailabilityService.get_availability(
        venue_id,
        space_id,
        date=request.args.get('date'),
        start_date=request.args.get('startDate'),
        end_date=request.args.get('endDate')
    )
    return jsonify(result), 200

@slots_bp.route('/<int:venue_id>/spaces/<space_id>/slots', methods=['POST'])
@token_required
@admin_required
def create_slot(current_user, venue_id, space_id):
    data = get_json_body()
    for field in ('date', 'startTime', 'endTime'):
        if not data.get(field):
            raise ValidationError(f"{field} is required")

    slot = SlotService.create_custom_slot(
        venue_id,
        space_id,
        date=data['date'],
        start_time=data['startTime'],
        end_time=data['endTime'],
        price=data.get('price'),
        created_by=current_user.id
    )
    return jsonify(slot.to_dict()), 201

@slots_bp.route('/<int:venue_id>/spaces/<space_id>/slots/<int:slot_id>', methods=['PUT'])
@token_required
@admin_required
def update_slot(current_user, venue_id, space_id, slot_id):
    data = get_json_body()
    slot = SlotService.update_custom_slot(
        venue_id,
        space_id,
        slot_id,
        date=data.get('date'),
        start_time=data.get('startTime'),
        end_time=data.get('endTime'),
        price=data.get('price'),
        is_active=data.get('isActive')
    )
    return jsonify(slot.to_dict()), 200

@slots_bp.route('/<int:venue_id>/spaces/<space_id>/slots/<int:slot_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_slot(current_user, venue_id, space_id, slot_id):
    SlotService.delete_custom_slot(venue_id, space_id, slot_id)
    return jsonify({'message': 'Time slot deleted'}), 200

@slots_bp.route('/<int:venue_id>/spaces/<space_id>/generate-slots', methods=['POST'])
@token_required
@admin_required
def generate_slots(current_user, venue_id, space_id):
    data = get_json_body()
    if not data.get('startDate') or not data.get('endDate'):
        raise ValidationError('startDate and endDate are required')

    result = SlotService.bulk_generate_slots(
        venue_id,
        space_id,
        start_date=data['startDate'],
        end_date=data['endDate'],
        price=data.get('price'),
        created_by=current_user.id
    )
    return jsonify(result), 201
