from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body
from blood_donation.schemas import BloodRequestCreate, BloodRequestStatusUpdate, FulfillRequest, DonorResponse
from blood_donation.services import blood_request_service

# Define Blueprint for the Blood Request controller
blood_request_bp = Blueprint('blood_request_bp', __name__)


# GET all blood requests, optionally filtered
@blood_request_bp.route('/', methods=['GET'])
def get_blood_requests():
    requests = blood_request_service.list_requests(
        status=request.args.get('status'),
        blood_group=request.args.get('blood_group'),
        recipient_id=request.args.get('recipient_id', type=int)
    )
    return jsonify([blood_request.to_dict() for blood_request in requests]), 200


@blood_request_bp.route('/pending', methods=['GET'])
def get_pending_blood_requests():
    requests = blood_request_service.list_requests(status='Pending')
    return jsonify([blood_request.to_dict() for blood_request in requests]), 200


@blood_request_bp.route('/<int:id>', methods=['GET'])
def get_blood_request(id):
    return jsonify(blood_request_service.get_request(id).to_dict()), 200


# POST a new blood request; matching donors and admins are notified
@blood_request_bp.route('/', methods=['POST'])
def create_blood_request():
    payload = BloodRequestCreate.model_validate(get_json_body())
    blood_request = blood_request_service.create_request(
        payload.recipient_user_id, payload.blood_group_needed, payload.quantity
    )
    return jsonify(blood_request.to_dict()), 201


# PUT a status change (admin or recipient)
@blood_request_bp.route('/<int:id>', methods=['PUT'])
def update_blood_request(id):
    payload = BloodRequestStatusUpdate.model_validate(get_json_body())
    blood_request = blood_request_service.update_status(id, payload.status, override=payload.override)
    return jsonify(blood_request.to_dict()), 200


# Donor-side completion: records the donation and moves stock
@blood_request_bp.route('/<int:id>/fulfill', methods=['POST'])
def fulfill_blood_request(id):
    payload = FulfillRequest.model_validate(get_json_body())
    blood_request = blood_request_service.fulfill_by_donor(id, payload.donor_id, payload.blood_bank_id)
    return jsonify(blood_request.to_dict()), 200


@blood_request_bp.route('/<int:id>/respond', methods=['POST'])
def respond_to_blood_request(id):
    payload = DonorResponse.model_validate(get_json_body())
    blood_request = blood_request_service.donor_respond(id, payload.donor_id, payload.response)
    return jsonify(blood_request.to_dict()), 200


@blood_request_bp.route('/<int:id>', methods=['DELETE'])
def delete_blood_request(id):
    deleted = blood_request_service.delete_request(id)
    return jsonify({'message': 'Blood request deleted successfully', 'blood_request': deleted}), 200
