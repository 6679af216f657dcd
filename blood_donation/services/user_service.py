from flask import current_app
from werkzeug.exceptions import NotFound

from blood_donation.extensions import db, bcrypt
from blood_donation.errors import InvalidOperation
from blood_donation.models import DonationRecord, User
from blood_donation.schemas import merge
from blood_donation.services.unit_of_work import unit_of_work

USER_FIELDS = ('first_name', 'last_name', 'username', 'email', 'phone')


def register_user(payload):
    if User.query.filter_by(username=payload.username).first():
        raise InvalidOperation('Username already taken')
    if User.query.filter_by(email=payload.email).first():
        raise InvalidOperation('Email already registered')

    user = User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        username=payload.username,
        email=payload.email,
        phone=payload.phone,
        password_hash=bcrypt.generate_password_hash(payload.password).decode('utf-8'),
        role=payload.role
    )
    with unit_of_work() as session:
        session.add(user)
    return user


def check_password(user, password):
    return bcrypt.check_password_hash(user.password_hash, password)


def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound(f'User with Id {user_id} not found')
    return user


def list_users(role=None):
    query = User.query
    if role:
        query = query.filter_by(role=role)
    return query.order_by(User.id).all()


def update_user(user_id, command):
    user = get_user(user_id)
    changes = command.model_dump(exclude_unset=True)
    if 'username' in changes and User.query.filter(User.username == changes['username'], User.id != user.id).first():
        raise InvalidOperation('Username already taken')
    if 'email' in changes and User.query.filter(User.email == changes['email'], User.id != user.id).first():
        raise InvalidOperation('Email already registered')

    current = {field: getattr(user, field) for field in USER_FIELDS}
    with unit_of_work():
        for field, value in merge(current, command).items():
            setattr(user, field, value)
    return user


def delete_user(user_id):
    """Remove the user together with their profile, its history and their notifications."""
    user = get_user(user_id)
    snapshot = user.to_dict()
    with unit_of_work() as session:
        donor = user.donor_profile
        if donor:
            for record in donor.donations + donor.request_links + donor.appointments:
                session.delete(record)
            session.delete(donor)

        recipient = user.recipient_profile
        if recipient:
            request_ids = [blood_request.id for blood_request in recipient.blood_requests]
            if request_ids:
                # Donations that fulfilled these requests stay on record, unlinked
                DonationRecord.query.filter(DonationRecord.request_id.in_(request_ids)) \
                    .update({DonationRecord.request_id: None}, synchronize_session='fetch')
            for blood_request in recipient.blood_requests:
                session.delete(blood_request)
            session.delete(recipient)

        for notification in user.notifications:
            session.delete(notification)
        session.flush()
        session.delete(user)
    current_app.logger.info('User %s deleted', user_id)
    return snapshot
