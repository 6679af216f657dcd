from flask import Blueprint, jsonify

from blood_donation.controllers import get_json_body
from blood_donation.schemas import RecipientProfileCreate, RecipientProfileUpdate
from blood_donation.services import recipient_service

recipient_bp = Blueprint('recipient_bp', __name__)


@recipient_bp.route('/', methods=['GET'])
def get_recipients():
    return jsonify([recipient.to_dict() for recipient in recipient_service.list_recipient_profiles()]), 200


@recipient_bp.route('/<int:id>', methods=['GET'])
def get_recipient(id):
    return jsonify(recipient_service.get_recipient_profile(id).to_dict()), 200


@recipient_bp.route('/user/<int:user_id>', methods=['GET'])
def get_recipient_by_user(user_id):
    return jsonify(recipient_service.get_recipient_profile_by_user(user_id).to_dict()), 200


@recipient_bp.route('/', methods=['POST'])
def create_recipient():
    payload = RecipientProfileCreate.model_validate(get_json_body())
    recipient = recipient_service.create_recipient_profile(payload)
    return jsonify(recipient.to_dict()), 201


@recipient_bp.route('/<int:id>', methods=['PUT'])
def update_recipient(id):
    command = RecipientProfileUpdate.model_validate(get_json_body())
    recipient = recipient_service.update_recipient_profile(id, command)
    return jsonify(recipient.to_dict()), 200


@recipient_bp.route('/<int:id>', methods=['DELETE'])
def delete_recipient(id):
    deleted = recipient_service.delete_recipient_profile(id)
    return jsonify({'message': 'Recipient deleted successfully', 'recipient': deleted}), 200
