import pytest

from blood_donation.services.blood_groups import (
    BLOOD_GROUPS, abo_rh_compatible, donor_groups_for, exact_match, get_strategy
)
from blood_donation.services.matching_service import find_matching_donors


def test_exact_match_only_accepts_the_same_group():
    assert donor_groups_for('AB-', exact_match) == ['AB-']
    assert donor_groups_for('X+', exact_match) == []


@pytest.mark.parametrize('needed, donors', [
    ('O-', ['O-']),
    ('A+', ['A+', 'A-', 'O+', 'O-']),
    ('AB-', ['A-', 'B-', 'AB-', 'O-']),
    ('AB+', list(BLOOD_GROUPS)),
])
def test_abo_rh_compatibility(needed, donors):
    assert donor_groups_for(needed, abo_rh_compatible) == donors


def test_unknown_strategy_name():
    assert get_strategy('compatible') is abo_rh_compatible
    with pytest.raises(ValueError):
        get_strategy('closest')


def test_find_matching_donors_filters_group_and_eligibility(make_donor):
    match = make_donor('B-')
    make_donor('B-', eligible=False)
    make_donor('B+')
    make_donor('O-')

    assert find_matching_donors('B-') == [match]


def test_configured_strategy_is_used_by_default(app, make_donor):
    same = make_donor('B-')
    universal = make_donor('O-')
    make_donor('A-')

    app.config['BLOOD_GROUP_MATCHING'] = 'compatible'

    assert find_matching_donors('B-') == [same, universal]


def test_no_donors_for_unknown_group(make_donor):
    make_donor('A+')

    assert find_matching_donors('Z+') == []
