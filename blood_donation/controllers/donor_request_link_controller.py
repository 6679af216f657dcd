from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body
from blood_donation.schemas import LinkResponse
from blood_donation.services import donor_request_link_service

donor_request_link_bp = Blueprint('donor_request_link_bp', __name__)


@donor_request_link_bp.route('/', methods=['GET'])
def get_links():
    links = donor_request_link_service.list_links(
        donor_id=request.args.get('donor_id', type=int),
        request_id=request.args.get('request_id', type=int),
        response_status=request.args.get('response_status')
    )
    return jsonify([link.to_dict() for link in links]), 200


@donor_request_link_bp.route('/<int:id>', methods=['GET'])
def get_link(id):
    return jsonify(donor_request_link_service.get_link(id).to_dict()), 200


# Donor answers the request behind a link
@donor_request_link_bp.route('/<int:id>/respond', methods=['POST'])
def respond_to_link(id):
    payload = LinkResponse.model_validate(get_json_body())
    link = donor_request_link_service.respond_to_link(id, payload.response)
    return jsonify(link.to_dict()), 200
