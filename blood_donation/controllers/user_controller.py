from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body
from blood_donation.schemas import UserCreate, UserUpdate
from blood_donation.services import user_service

user_bp = Blueprint('user_bp', __name__)


@user_bp.route('/', methods=['GET'])
def get_users():
    users = user_service.list_users(role=request.args.get('role'))
    return jsonify([user.to_dict() for user in users]), 200


@user_bp.route('/<int:id>', methods=['GET'])
def get_user(id):
    return jsonify(user_service.get_user(id).to_dict()), 200


@user_bp.route('/', methods=['POST'])
def create_user():
    payload = UserCreate.model_validate(get_json_body())
    user = user_service.register_user(payload)
    return jsonify(user.to_dict()), 201


# PUT partial update; password and role are not changed here
@user_bp.route('/<int:id>', methods=['PUT'])
def update_user(id):
    command = UserUpdate.model_validate(get_json_body())
    user = user_service.update_user(id, command)
    return jsonify(user.to_dict()), 200


@user_bp.route('/<int:id>', methods=['DELETE'])
def delete_user(id):
    deleted = user_service.delete_user(id)
    return jsonify({'message': 'User deleted successfully', 'user': deleted}), 200
