from flask import current_app

from blood_donation.models import DonorProfile
from blood_donation.services.blood_groups import donor_groups_for, get_strategy


def configured_predicate():
    return get_strategy(current_app.config.get('BLOOD_GROUP_MATCHING', 'exact'))


def find_matching_donors(blood_group, predicate=None):
    """Eligible donors whose blood group the predicate accepts for ``blood_group``, in id order."""
    predicate = predicate or configured_predicate()
    groups = donor_groups_for(blood_group, predicate)
    if not groups:
        return []
    return (
        DonorProfile.query
        .filter(DonorProfile.blood_group.in_(groups), DonorProfile.eligibility_status.is_(True))
        .order_by(DonorProfile.id)
        .all()
    )
