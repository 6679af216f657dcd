from werkzeug.exceptions import NotFound

from blood_donation.extensions import db
from blood_donation.errors import InvalidOperation
from blood_donation.models import RecipientProfile, User, UserRole
from blood_donation.schemas import merge
from blood_donation.services.unit_of_work import unit_of_work

PROFILE_FIELDS = ('hospital_name', 'patient_name', 'required_blood_group', 'contact_number')


def get_recipient_profile(recipient_id):
    recipient = db.session.get(RecipientProfile, recipient_id)
    if not recipient:
        raise NotFound(f'Recipient with Id {recipient_id} not found')
    return recipient


def get_recipient_profile_by_user(user_id):
    recipient = RecipientProfile.query.filter_by(user_id=user_id).first()
    if not recipient:
        raise NotFound(f'Recipient profile for user {user_id} not found')
    return recipient


def list_recipient_profiles():
    return RecipientProfile.query.order_by(RecipientProfile.id).all()


def create_recipient_profile(payload):
    user = db.session.get(User, payload.user_id)
    if not user:
        raise NotFound(f'User with Id {payload.user_id} not found')
    if user.role != UserRole.RECIPIENT:
        raise InvalidOperation(f'User {user.id} is not a recipient')
    if user.recipient_profile:
        raise InvalidOperation(f'User {user.id} already has a recipient profile')

    recipient = RecipientProfile(
        user_id=user.id,
        hospital_name=payload.hospital_name,
        patient_name=payload.patient_name,
        required_blood_group=payload.required_blood_group,
        contact_number=payload.contact_number
    )
    with unit_of_work() as session:
        session.add(recipient)
    return recipient


def update_recipient_profile(recipient_id, command):
    recipient = get_recipient_profile(recipient_id)
    current = {field: getattr(recipient, field) for field in PROFILE_FIELDS}
    with unit_of_work():
        for field, value in merge(current, command).items():
            setattr(recipient, field, value)
    return recipient


def delete_recipient_profile(recipient_id):
    recipient = get_recipient_profile(recipient_id)
    if recipient.blood_requests:
        raise InvalidOperation(f'Recipient {recipient_id} has blood requests and cannot be deleted')
    snapshot = recipient.to_dict()
    with unit_of_work() as session:
        session.delete(recipient)
    return snapshot
