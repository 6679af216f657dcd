from flask import request
from werkzeug.exceptions import BadRequest


def get_json_body():
    data = request.get_json(silent=True)
    if not data:
        raise BadRequest('No input data provided')
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a JSON object')
    return data


def parse_bool_arg(name):
    value = request.args.get(name)
    if value is None:
        return None
    return value.lower() in ('1', 'true', 'yes')
