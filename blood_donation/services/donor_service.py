from datetime import datetime

from flask import current_app
from werkzeug.exceptions import NotFound

from blood_donation.extensions import db
from blood_donation.errors import InvalidOperation
from blood_donation.models import DonorProfile, User, UserRole
from blood_donation.schemas import merge
from blood_donation.services.eligibility import is_eligible
from blood_donation.services.unit_of_work import unit_of_work

PROFILE_FIELDS = ('blood_group', 'age', 'gender', 'last_donation_date', 'eligibility_status')


def _cooldown_days():
    return current_app.config.get('ELIGIBILITY_COOLDOWN_DAYS', 90)


def get_donor_profile(donor_id):
    donor = db.session.get(DonorProfile, donor_id)
    if not donor:
        raise NotFound(f'Donor with Id {donor_id} not found')
    return donor


def get_donor_profile_by_user(user_id):
    donor = DonorProfile.query.filter_by(user_id=user_id).first()
    if not donor:
        raise NotFound(f'Donor profile for user {user_id} not found')
    return donor


def list_donor_profiles(blood_group=None, eligible=None):
    query = DonorProfile.query
    if blood_group:
        query = query.filter_by(blood_group=blood_group)
    if eligible is not None:
        query = query.filter_by(eligibility_status=eligible)
    return query.order_by(DonorProfile.id).all()


def create_donor_profile(payload):
    user = db.session.get(User, payload.user_id)
    if not user:
        raise NotFound(f'User with Id {payload.user_id} not found')
    if user.role != UserRole.DONOR:
        raise InvalidOperation(f'User {user.id} is not a donor')
    if user.donor_profile:
        raise InvalidOperation(f'User {user.id} already has a donor profile')

    donor = DonorProfile(
        user_id=user.id,
        blood_group=payload.blood_group,
        age=payload.age,
        gender=payload.gender,
        last_donation_date=payload.last_donation_date,
        eligibility_status=is_eligible(payload.last_donation_date, cooldown_days=_cooldown_days())
    )
    with unit_of_work() as session:
        session.add(donor)
    return donor


def update_donor_profile(donor_id, command):
    donor = get_donor_profile(donor_id)
    current = {field: getattr(donor, field) for field in PROFILE_FIELDS}
    updated = merge(current, command)

    # A new donation date wins over a manually supplied flag
    if 'last_donation_date' in command.model_fields_set:
        updated['eligibility_status'] = is_eligible(updated['last_donation_date'],
                                                    cooldown_days=_cooldown_days())

    with unit_of_work():
        for field, value in updated.items():
            setattr(donor, field, value)
    return donor


def delete_donor_profile(donor_id):
    donor = get_donor_profile(donor_id)
    if donor.donations:
        raise InvalidOperation(f'Donor {donor_id} has donation records and cannot be deleted')
    snapshot = donor.to_dict()
    with unit_of_work() as session:
        for link in donor.request_links:
            session.delete(link)
        for appointment in donor.appointments:
            session.delete(appointment)
        session.delete(donor)
    return snapshot


def refresh_eligibility(now=None):
    """Recompute every donor's stored flag from their last donation date; return how many changed."""
    now = now or datetime.utcnow()
    cooldown = _cooldown_days()
    changed = 0
    with unit_of_work():
        for donor in DonorProfile.query.all():
            eligible = is_eligible(donor.last_donation_date, now=now, cooldown_days=cooldown)
            if donor.eligibility_status != eligible:
                donor.eligibility_status = eligible
                changed += 1
    current_app.logger.info('Eligibility refresh updated %s donor profiles', changed)
    return changed
