from flask import Blueprint, request, jsonify
from betterplay.services.inquiry_service import InquiryService
from betterplay.utils.decorators import token_required, admin_required

inquiries_bp = Blueprint('inquiries', __name__)

@inquiries_bp.route('/venues/<int:venue_id>/spaces/<space_id>/inquiries', methods=['POST'])
@token_required
def create_inquiry(current_user, venue_id, space_id):
    inquiry = InquiryService.create_inquiry(current_user, venue_id, space_id, request.get_json(silent=True))
    return jsonify(inquiry.to_dict()), 201

@inquiries_bp.route('/inquiries', methods=['GET'])
@token_required
@admin_required
def list_inquiries(current_user):
    inquiries = InquiryService.list_inquiries(status=request.args.get('status'))
    return jsonify([i.to_dict() for i in inquiries]), 200

@inquiries_bp.route('/inquiries/mine', methods=['GET'])
@token_required
def my_inquiries(current_user):
    inquiries = InquiryService.list_inquiries(user_id=current_user.id)
    return jsonify([i.to_dict() for i in inquiries]), 200

@inquiries_bp.route('/inquiries/<int:inquiry_id>/status', methods=['PATCH'])
@token_required
@admin_required
def update_inquiry_status(current_user, inquiry_id):
    data = request.get_json(silent=True) or {}
    inquiry = InquiryService.update_status(inquiry_id, data.get('status'))
    return jsonify(inquiry.to_dict()), 200
