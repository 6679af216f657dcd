from datetime import datetime

from flask import Flask, jsonify

from blood_donation.config import Config, DevelopmentConfig
from blood_donation.extensions import db, migrate, bcrypt, cors, scheduler
from blood_donation.errors import register_error_handlers
from blood_donation.cli import register_commands

# Import controllers (blueprints) for each module
from blood_donation.controllers.user_controller import user_bp
from blood_donation.controllers.donor_controller import donor_bp
from blood_donation.controllers.recipient_controller import recipient_bp
from blood_donation.controllers.blood_bank_controller import blood_bank_bp
from blood_donation.controllers.blood_stock_controller import blood_stock_bp
from blood_donation.controllers.blood_request_controller import blood_request_bp
from blood_donation.controllers.donor_request_link_controller import donor_request_link_bp
from blood_donation.controllers.donation_record_controller import donation_record_bp
from blood_donation.controllers.appointment_controller import appointment_bp
from blood_donation.controllers.notification_controller import notification_bp


def create_app(config_object=None):
    """Flask application factory"""
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    cors.init_app(app)

    # Register Blueprints with appropriate URL prefixes
    app.register_blueprint(user_bp, url_prefix='/api/v1/users')
    app.register_blueprint(donor_bp, url_prefix='/api/v1/donors')
    app.register_blueprint(recipient_bp, url_prefix='/api/v1/recipients')
    app.register_blueprint(blood_bank_bp, url_prefix='/api/v1/bloodbanks')
    app.register_blueprint(blood_stock_bp, url_prefix='/api/v1/bloodstocks')
    app.register_blueprint(blood_request_bp, url_prefix='/api/v1/bloodrequests')
    app.register_blueprint(donor_request_link_bp, url_prefix='/api/v1/donorrequestlinks')
    app.register_blueprint(donation_record_bp, url_prefix='/api/v1/donations')
    app.register_blueprint(appointment_bp, url_prefix='/api/v1/appointments')
    app.register_blueprint(notification_bp, url_prefix='/api/v1/notifications')

    register_error_handlers(app)
    register_commands(app)

    @app.route('/api/health', methods=['GET'])
    def health_check():
        return jsonify({'status': 'healthy', 'timestamp': datetime.utcnow().isoformat()}), 200

    if app.config.get('ELIGIBILITY_REFRESH_ENABLED'):
        _start_eligibility_refresh(app)

    return app


def _start_eligibility_refresh(app):
    from blood_donation.services.donor_service import refresh_eligibility

    # The scheduler is process-wide; a second app in the same process reuses the running job
    if scheduler.running:
        app.logger.info('Donor eligibility refresh already running, not scheduling again')
        return

    def run_refresh():
        with scheduler.app.app_context():
            refresh_eligibility()

    scheduler.init_app(app)
    scheduler.add_job(
        id='refresh-donor-eligibility',
        func=run_refresh,
        trigger='interval',
        hours=app.config['ELIGIBILITY_REFRESH_HOURS'],
        replace_existing=True,
    )
    scheduler.start()
    app.logger.info('Donor eligibility refresh scheduled every %s hours', app.config['ELIGIBILITY_REFRESH_HOURS'])


# Ensure the app runs only if this script is executed directly
if __name__ == '__main__':
    app = create_app(DevelopmentConfig)
    app.run(debug=True)
