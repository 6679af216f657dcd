from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body
from blood_donation.schemas import DonationCreate, DonationStatusUpdate
from blood_donation.services import donation_service

donation_record_bp = Blueprint('donation_record_bp', __name__)


@donation_record_bp.route('/', methods=['GET'])
def get_donations():
    donations = donation_service.list_donations(
        donor_id=request.args.get('donor_id', type=int),
        blood_bank_id=request.args.get('blood_bank_id', type=int)
    )
    return jsonify([donation.to_dict() for donation in donations]), 200


@donation_record_bp.route('/<int:id>', methods=['GET'])
def get_donation(id):
    return jsonify(donation_service.get_donation(id).to_dict()), 200


# POST a walk-in donation; same-day repeats return the existing record
@donation_record_bp.route('/', methods=['POST'])
def create_donation():
    payload = DonationCreate.model_validate(get_json_body())
    donation, created = donation_service.record_donation(payload.donor_id, payload.blood_bank_id, payload.quantity)
    return jsonify(donation.to_dict()), 201 if created else 200


@donation_record_bp.route('/<int:id>/status', methods=['PUT'])
def update_donation_status(id):
    payload = DonationStatusUpdate.model_validate(get_json_body())
    donation = donation_service.update_donation_status(id, payload.status)
    return jsonify(donation.to_dict()), 200
