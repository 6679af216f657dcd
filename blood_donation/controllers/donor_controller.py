from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body, parse_bool_arg
from blood_donation.schemas import DonorProfileCreate, DonorProfileUpdate
from blood_donation.services import donor_service

# Define Blueprint for the Donor controller
donor_bp = Blueprint('donor_bp', __name__)


@donor_bp.route('/', methods=['GET'])
def get_donors():
    donors = donor_service.list_donor_profiles(
        blood_group=request.args.get('blood_group'),
        eligible=parse_bool_arg('eligible')
    )
    return jsonify([donor.to_dict() for donor in donors]), 200


@donor_bp.route('/<int:id>', methods=['GET'])
def get_donor(id):
    return jsonify(donor_service.get_donor_profile(id).to_dict()), 200


@donor_bp.route('/user/<int:user_id>', methods=['GET'])
def get_donor_by_user(user_id):
    return jsonify(donor_service.get_donor_profile_by_user(user_id).to_dict()), 200


@donor_bp.route('/', methods=['POST'])
def create_donor():
    payload = DonorProfileCreate.model_validate(get_json_body())
    donor = donor_service.create_donor_profile(payload)
    return jsonify(donor.to_dict()), 201


# PUT partial update; only the fields sent are changed
@donor_bp.route('/<int:id>', methods=['PUT'])
def update_donor(id):
    command = DonorProfileUpdate.model_validate(get_json_body())
    donor = donor_service.update_donor_profile(id, command)
    return jsonify(donor.to_dict()), 200


@donor_bp.route('/<int:id>', methods=['DELETE'])
def delete_donor(id):
    deleted = donor_service.delete_donor_profile(id)
    return jsonify({'message': 'Donor deleted successfully', 'donor': deleted}), 200
