from flask import jsonify
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import Conflict, HTTPException

from blood_donation.extensions import db


class InvalidOperation(Conflict):
    """A workflow precondition does not hold, such as acting on a terminal request."""


def register_error_handlers(app):

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        errors = [
            {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
            for err in e.errors()
        ]
        return jsonify({'error': 'Invalid input', 'details': errors}), 400

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        db.session.rollback()
        app.logger.exception('Database error')
        return jsonify({'error': 'Database error occurred'}), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception('Unhandled error')
        return jsonify({'error': 'Internal server error'}), 500
