from datetime import datetime, timedelta

from flask import current_app
from werkzeug.exceptions import BadRequest, NotFound

from blood_donation.extensions import db
from blood_donation.models import BloodRequest, DonationRecord, DonationStatus, RequestStatus
from blood_donation.services.blood_bank_service import get_blood_bank
from blood_donation.services.blood_stock_service import add_units
from blood_donation.services.donor_service import get_donor_profile
from blood_donation.services.notification_service import notify
from blood_donation.services.unit_of_work import unit_of_work

# Pending requests younger than this hear about a matching walk-in donation
RECENT_REQUEST_DAYS = 30


def list_donations(donor_id=None, blood_bank_id=None):
    query = DonationRecord.query
    if donor_id is not None:
        query = query.filter_by(donor_id=donor_id)
    if blood_bank_id is not None:
        query = query.filter_by(blood_bank_id=blood_bank_id)
    return query.order_by(DonationRecord.donation_date.desc(), DonationRecord.id.desc()).all()


def get_donation(donation_id):
    donation = db.session.get(DonationRecord, donation_id)
    if not donation:
        raise NotFound(f'Donation Record with Id {donation_id} not found')
    return donation


def record_donation(donor_id, blood_bank_id, quantity):
    """Record a walk-in donation.

    Returns ``(donation, created)``; a second donation by the same donor at
    the same bank on the same day returns the existing record unchanged.
    """
    donor = get_donor_profile(donor_id)
    bank = get_blood_bank(blood_bank_id)

    now = datetime.utcnow()
    start_of_day = datetime(now.year, now.month, now.day)
    existing = DonationRecord.query.filter(
        DonationRecord.donor_id == donor.id,
        DonationRecord.blood_bank_id == bank.id,
        DonationRecord.donation_date >= start_of_day,
        DonationRecord.donation_date < start_of_day + timedelta(days=1)
    ).first()
    if existing:
        return existing, False

    with unit_of_work() as session:
        donation = DonationRecord(
            donor_id=donor.id,
            blood_bank_id=bank.id,
            donation_date=now,
            quantity=quantity,
            status=DonationStatus.COMPLETED
        )
        session.add(donation)

        add_units(bank.id, donor.blood_group, quantity)
        donor.last_donation_date = now
        donor.eligibility_status = False

        notify(donor.user_id,
               f"Thank you for your generous blood donation of {quantity} units! "
               f"Your contribution will help save lives.")

        pending_requests = BloodRequest.query.filter(
            BloodRequest.blood_group_needed == donor.blood_group,
            BloodRequest.status == RequestStatus.PENDING,
            BloodRequest.request_date >= now - timedelta(days=RECENT_REQUEST_DAYS)
        ).all()
        for blood_request in pending_requests:
            notify(blood_request.recipient.user_id,
                   f"Good news! A donor has contributed {donor.blood_group} blood. "
                   f"Your request is being processed.")

    current_app.logger.info('Donation of %s units recorded for donor %s at blood bank %s',
                            quantity, donor.id, bank.id)
    return donation, True


def update_donation_status(donation_id, status):
    if status not in DonationStatus.ALL:
        raise BadRequest('Status must be one of: Completed, Pending, Cancelled, or Rejected')
    donation = get_donation(donation_id)
    with unit_of_work():
        donation.status = status
    return donation
