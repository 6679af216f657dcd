from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body, parse_bool_arg
from blood_donation.schemas import NotificationCreate
from blood_donation.services import notification_service

# Define the Blueprint for handling notifications
notification_bp = Blueprint('notification_bp', __name__)


# GET notifications, newest first
@notification_bp.route('/', methods=['GET'])
def get_notifications():
    notifications = notification_service.list_notifications(
        user_id=request.args.get('user_id', type=int),
        unread_only=bool(parse_bool_arg('unread'))
    )
    return jsonify([notification.to_dict() for notification in notifications]), 200


@notification_bp.route('/<int:id>', methods=['GET'])
def get_notification(id):
    return jsonify(notification_service.get_notification(id).to_dict()), 200


@notification_bp.route('/user/<int:user_id>/unread-count', methods=['GET'])
def get_unread_count(user_id):
    return jsonify({'user_id': user_id, 'unread_count': notification_service.unread_count(user_id)}), 200


# POST a manual notification
@notification_bp.route('/', methods=['POST'])
def create_notification():
    payload = NotificationCreate.model_validate(get_json_body())
    notification = notification_service.create_notification(payload.user_id, payload.message)
    return jsonify(notification.to_dict()), 201


@notification_bp.route('/<int:id>/read', methods=['PUT'])
def mark_notification_read(id):
    return jsonify(notification_service.mark_as_read(id).to_dict()), 200
