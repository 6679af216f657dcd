from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body, parse_bool_arg
from blood_donation.schemas import AppointmentCreate, AppointmentUpdate
from blood_donation.services import appointment_service

appointment_bp = Blueprint('appointment_bp', __name__)


@appointment_bp.route('/', methods=['GET'])
def get_appointments():
    appointments = appointment_service.list_appointments(
        donor_id=request.args.get('donor_id', type=int),
        blood_bank_id=request.args.get('blood_bank_id', type=int),
        upcoming=bool(parse_bool_arg('upcoming'))
    )
    return jsonify([appointment.to_dict() for appointment in appointments]), 200


@appointment_bp.route('/<int:id>', methods=['GET'])
def get_appointment(id):
    return jsonify(appointment_service.get_appointment(id).to_dict()), 200


@appointment_bp.route('/', methods=['POST'])
def create_appointment():
    payload = AppointmentCreate.model_validate(get_json_body())
    appointment = appointment_service.schedule_appointment(
        payload.donor_id, payload.blood_bank_id, payload.appointment_date, payload.remarks
    )
    return jsonify(appointment.to_dict()), 201


# PUT reschedule: date, bank, status or remarks, only the fields sent
@appointment_bp.route('/<int:id>', methods=['PUT'])
def update_appointment(id):
    command = AppointmentUpdate.model_validate(get_json_body())
    appointment = appointment_service.reschedule_appointment(id, command)
    return jsonify(appointment.to_dict()), 200


@appointment_bp.route('/<int:id>/cancel', methods=['POST'])
def cancel_appointment(id):
    appointment = appointment_service.update_appointment_status(id, 'Cancelled')
    return jsonify(appointment.to_dict()), 200
