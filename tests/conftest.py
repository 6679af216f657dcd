import itertools

import pytest

from blood_donation import create_app
from blood_donation.config import TestingConfig
from blood_donation.extensions import db
from blood_donation.models import BloodBank, DonorProfile, RecipientProfile, User, UserRole


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = itertools.count(1)

    def _make_user(role=UserRole.DONOR, first_name='Test', last_name=None):
        n = next(counter)
        user = User(
            first_name=first_name,
            last_name=last_name or f'User{n}',
            username=f'user{n}',
            email=f'user{n}@example.com',
            password_hash='not-a-real-hash',
            role=role
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def make_admin(make_user):
    def _make_admin():
        return make_user(role=UserRole.ADMIN, first_name='Admin')
    return _make_admin


@pytest.fixture
def make_donor(make_user):
    def _make_donor(blood_group='A+', eligible=True, last_donation_date=None, first_name='Donor'):
        user = make_user(role=UserRole.DONOR, first_name=first_name)
        donor = DonorProfile(
            user_id=user.id,
            blood_group=blood_group,
            age=30,
            gender='Female',
            last_donation_date=last_donation_date,
            eligibility_status=eligible
        )
        db.session.add(donor)
        db.session.commit()
        return donor
    return _make_donor


@pytest.fixture
def make_recipient(make_user):
    def _make_recipient(blood_group='A+', hospital_name='General Hospital'):
        user = make_user(role=UserRole.RECIPIENT, first_name='Recipient')
        recipient = RecipientProfile(
            user_id=user.id,
            hospital_name=hospital_name,
            patient_name='Jane Patient',
            required_blood_group=blood_group,
            contact_number='9876543210'
        )
        db.session.add(recipient)
        db.session.commit()
        return recipient
    return _make_recipient


@pytest.fixture
def make_bank(app):
    def _make_bank(name='City Blood Bank'):
        bank = BloodBank(
            name=name,
            location='Main Street',
            contact_number='9876543210',
            email='bank@example.com',
            capacity=500
        )
        db.session.add(bank)
        db.session.commit()
        return bank
    return _make_bank
