from datetime import datetime

from werkzeug.exceptions import NotFound

from blood_donation.extensions import db
from blood_donation.errors import InvalidOperation
from blood_donation.models import BloodBank, BloodStock
from blood_donation.services.unit_of_work import unit_of_work


def add_units(blood_bank_id, blood_group, units):
    """Increment the bank's stock row for ``blood_group`` by ``units``, creating it if missing.

    Joins the caller's unit of work; nothing is committed here.
    """
    stock = BloodStock.query.filter_by(blood_bank_id=blood_bank_id, blood_group=blood_group).first()
    if stock:
        stock.units_available += units
        stock.last_updated = datetime.utcnow()
    else:
        stock = BloodStock(
            blood_bank_id=blood_bank_id,
            blood_group=blood_group,
            units_available=units,
            last_updated=datetime.utcnow()
        )
        db.session.add(stock)
    return stock


def list_stocks(blood_group=None, blood_bank_id=None):
    query = BloodStock.query
    if blood_group:
        query = query.filter_by(blood_group=blood_group)
    if blood_bank_id is not None:
        query = query.filter_by(blood_bank_id=blood_bank_id)
    return query.order_by(BloodStock.blood_bank_id, BloodStock.blood_group).all()


def get_stock(stock_id):
    stock = db.session.get(BloodStock, stock_id)
    if not stock:
        raise NotFound(f'Blood Stock with Id {stock_id} not found')
    return stock


def create_stock(payload):
    if not db.session.get(BloodBank, payload.blood_bank_id):
        raise NotFound(f'Blood Bank with Id {payload.blood_bank_id} not found')
    existing = BloodStock.query.filter_by(blood_bank_id=payload.blood_bank_id,
                                          blood_group=payload.blood_group).first()
    if existing:
        raise InvalidOperation(f'Stock for {payload.blood_group} already exists at blood bank {payload.blood_bank_id}')

    stock = BloodStock(
        blood_bank_id=payload.blood_bank_id,
        blood_group=payload.blood_group,
        units_available=payload.units_available,
        last_updated=datetime.utcnow()
    )
    with unit_of_work() as session:
        session.add(stock)
    return stock


def set_units(stock_id, units):
    stock = get_stock(stock_id)
    with unit_of_work():
        stock.units_available = units
        stock.last_updated = datetime.utcnow()
    return stock
