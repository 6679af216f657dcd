"""
Blood group catalogue and the predicates that decide which donors can
answer a request.

A predicate takes ``(donor_group, needed_group)`` and returns True when a
donor of ``donor_group`` should be matched to a request for
``needed_group``.
"""

BLOOD_GROUPS = ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-')

# Who can RECEIVE FROM whom (Recipient Blood Group -> Donor Blood Groups)
RECEIVE_COMPATIBILITY = {
    'A+': ('A+', 'A-', 'O+', 'O-'),
    'A-': ('A-', 'O-'),
    'B+': ('B+', 'B-', 'O+', 'O-'),
    'B-': ('B-', 'O-'),
    'AB+': BLOOD_GROUPS,  # Universal recipient
    'AB-': ('A-', 'B-', 'AB-', 'O-'),
    'O+': ('O+', 'O-'),
    'O-': ('O-',),
}


def exact_match(donor_group, needed_group):
    return donor_group == needed_group


def abo_rh_compatible(donor_group, needed_group):
    return donor_group in RECEIVE_COMPATIBILITY.get(needed_group, ())


MATCHING_STRATEGIES = {
    'exact': exact_match,
    'compatible': abo_rh_compatible,
}


def get_strategy(name):
    try:
        return MATCHING_STRATEGIES[name]
    except KeyError:
        raise ValueError(f'Unknown blood group matching strategy: {name}') from None


def donor_groups_for(needed_group, predicate=exact_match):
    """Return the canonical donor groups the predicate accepts for ``needed_group``."""
    return [group for group in BLOOD_GROUPS if predicate(group, needed_group)]


def is_valid_blood_group(value):
    return value in BLOOD_GROUPS
