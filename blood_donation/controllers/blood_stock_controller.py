from flask import Blueprint, request, jsonify

from blood_donation.controllers import get_json_body
from blood_donation.schemas import BloodStockCreate, BloodStockUpdate
from blood_donation.services import blood_stock_service

blood_stock_bp = Blueprint('blood_stock_bp', __name__)


@blood_stock_bp.route('/', methods=['GET'])
def get_blood_stocks():
    stocks = blood_stock_service.list_stocks(
        blood_group=request.args.get('blood_group'),
        blood_bank_id=request.args.get('blood_bank_id', type=int)
    )
    return jsonify([stock.to_dict() for stock in stocks]), 200


@blood_stock_bp.route('/<int:id>', methods=['GET'])
def get_blood_stock(id):
    return jsonify(blood_stock_service.get_stock(id).to_dict()), 200


@blood_stock_bp.route('/', methods=['POST'])
def create_blood_stock():
    payload = BloodStockCreate.model_validate(get_json_body())
    stock = blood_stock_service.create_stock(payload)
    return jsonify(stock.to_dict()), 201


# PUT an absolute unit count (stock correction)
@blood_stock_bp.route('/<int:id>', methods=['PUT'])
def update_blood_stock(id):
    payload = BloodStockUpdate.model_validate(get_json_body())
    stock = blood_stock_service.set_units(id, payload.units_available)
    return jsonify(stock.to_dict()), 200
