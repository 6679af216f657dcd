from werkzeug.exceptions import NotFound

from blood_donation.extensions import db
from blood_donation.errors import InvalidOperation
from blood_donation.models import BloodBank
from blood_donation.schemas import merge
from blood_donation.services.unit_of_work import unit_of_work

BANK_FIELDS = ('name', 'location', 'contact_number', 'email', 'capacity', 'managed_by')


def get_blood_bank(bank_id):
    bank = db.session.get(BloodBank, bank_id)
    if not bank:
        raise NotFound(f'Blood Bank with Id {bank_id} not found')
    return bank


def list_blood_banks(location=None):
    query = BloodBank.query
    if location:
        query = query.filter(BloodBank.location.ilike(f'%{location}%'))
    return query.order_by(BloodBank.id).all()


def first_blood_bank():
    return BloodBank.query.order_by(BloodBank.id).first()


def create_blood_bank(payload):
    if BloodBank.query.filter_by(name=payload.name, location=payload.location).first():
        raise InvalidOperation('Blood Bank with this name already exists in this location')
    bank = BloodBank(**payload.model_dump())
    with unit_of_work() as session:
        session.add(bank)
    return bank


def update_blood_bank(bank_id, command):
    bank = get_blood_bank(bank_id)
    current = {field: getattr(bank, field) for field in BANK_FIELDS}
    with unit_of_work():
        for field, value in merge(current, command).items():
            setattr(bank, field, value)
    return bank


def delete_blood_bank(bank_id):
    bank = get_blood_bank(bank_id)
    if bank.stocks or bank.donations:
        raise InvalidOperation(f'Blood Bank {bank_id} still holds stock or donation records')
    snapshot = bank.to_dict()
    with unit_of_work() as session:
        for appointment in bank.appointments:
            session.delete(appointment)
        session.delete(bank)
    return snapshot
