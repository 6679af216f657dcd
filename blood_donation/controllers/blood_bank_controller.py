from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body
from blood_donation.schemas import BloodBankCreate, BloodBankUpdate
from blood_donation.services import blood_bank_service

blood_bank_bp = Blueprint('blood_bank_bp', __name__)


@blood_bank_bp.route('/', methods=['GET'])
def get_blood_banks():
    banks = blood_bank_service.list_blood_banks(location=request.args.get('location'))
    return jsonify([bank.to_dict() for bank in banks]), 200


@blood_bank_bp.route('/<int:id>', methods=['GET'])
def get_blood_bank(id):
    return jsonify(blood_bank_service.get_blood_bank(id).to_dict()), 200


@blood_bank_bp.route('/', methods=['POST'])
def create_blood_bank():
    payload = BloodBankCreate.model_validate(get_json_body())
    bank = blood_bank_service.create_blood_bank(payload)
    return jsonify(bank.to_dict()), 201


@blood_bank_bp.route('/<int:id>', methods=['PUT'])
def update_blood_bank(id):
    command = BloodBankUpdate.model_validate(get_json_body())
    bank = blood_bank_service.update_blood_bank(id, command)
    return jsonify(bank.to_dict()), 200


@blood_bank_bp.route('/<int:id>', methods=['DELETE'])
def delete_blood_bank(id):
    deleted = blood_bank_service.delete_blood_bank(id)
    return jsonify({'message': 'Blood bank deleted successfully', 'blood_bank': deleted}), 200
