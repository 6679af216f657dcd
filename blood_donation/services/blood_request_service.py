"""
Blood request lifecycle.

A request is created Pending, can be approved by a donor accepting it or
by an admin, and ends Fulfilled or Cancelled. Creation links and notifies
every matching donor; donor fulfilment records the donation, moves stock
and resets the donor's eligibility. Each of those multi-row changes
commits as a single unit of work.
"""

from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest, NotFound

from blood_donation.extensions import db
from blood_donation.errors import InvalidOperation
from blood_donation.models import (
    BloodRequest, DonationRecord, DonationStatus, DonorRequestLink, RecipientProfile, RequestStatus, ResponseStatus
)
from blood_donation.services.blood_bank_service import first_blood_bank, get_blood_bank
from blood_donation.services.blood_groups import is_valid_blood_group
from blood_donation.services.blood_stock_service import add_units
from blood_donation.services.donor_service import get_donor_profile
from blood_donation.services.matching_service import find_matching_donors
from blood_donation.services.notification_service import notify, notify_admins, notify_first_admin
from blood_donation.services.unit_of_work import unit_of_work

DONOR_RESPONSES = ('accept', 'decline')


def list_requests(status=None, blood_group=None, recipient_id=None):
    query = BloodRequest.query
    if status:
        query = query.filter_by(status=status)
    if blood_group:
        query = query.filter_by(blood_group_needed=blood_group)
    if recipient_id is not None:
        query = query.filter_by(recipient_id=recipient_id)
    return query.order_by(BloodRequest.request_date.desc(), BloodRequest.id.desc()).all()


def get_request(request_id):
    blood_request = db.session.get(BloodRequest, request_id)
    if not blood_request:
        raise NotFound(f'Blood Request with Id {request_id} not found')
    return blood_request


def create_request(recipient_user_id, blood_group_needed, quantity, predicate=None):
    if not is_valid_blood_group(blood_group_needed):
        raise BadRequest(f'Invalid blood group: {blood_group_needed}')
    if not 1 <= quantity <= 10:
        raise BadRequest('Quantity must be between 1 and 10 units')

    recipient = RecipientProfile.query.filter_by(user_id=recipient_user_id).first()
    if not recipient:
        raise InvalidOperation('Recipient profile not found. Please create your profile first.')

    now = datetime.utcnow()
    with unit_of_work() as session:
        blood_request = BloodRequest(
            recipient=recipient,
            blood_group_needed=blood_group_needed,
            quantity=quantity,
            request_date=now,
            status=RequestStatus.PENDING
        )
        session.add(blood_request)
        session.flush()

        donors = find_matching_donors(blood_group_needed, predicate)
        for donor in donors:
            session.add(DonorRequestLink(donor_id=donor.id, request=blood_request, linked_at=now))
            notify(donor.user_id,
                   f"New blood request: {blood_group_needed} ({quantity} units needed). Please accept or decline.")

        notify_admins(f"New blood request: {blood_group_needed} ({quantity} units). "
                      f"{len(donors)} donors notified.")

    current_app.logger.info('Blood request %s created for %s, %s donors notified',
                            blood_request.id, blood_group_needed, len(donors))
    return blood_request


def _status_message(blood_request, new_status):
    summary = f"{blood_request.blood_group_needed} ({blood_request.quantity} units)"
    if new_status == RequestStatus.APPROVED:
        return f"Good news! Your blood request for {summary} has been approved."
    if new_status == RequestStatus.CANCELLED:
        return f"Your blood request for {summary} has been cancelled."
    if new_status == RequestStatus.FULFILLED:
        return f"Great! Your blood request for {summary} has been fulfilled."
    return f"Your blood request for {summary} status has been updated to {new_status}."


def _notify_status_change(blood_request, new_status):
    # Best effort: the status change is already committed
    try:
        with unit_of_work():
            notify(blood_request.recipient.user_id, _status_message(blood_request, new_status))
            if new_status == RequestStatus.FULFILLED:
                notify_admins(f"Blood request #{blood_request.id} for {blood_request.blood_group_needed} "
                              f"({blood_request.quantity} units) has been marked as fulfilled by the recipient.")
    except Exception:
        current_app.logger.exception('Failed to send status notifications for blood request %s',
                                     blood_request.id)


def update_status(request_id, new_status, override=False):
    if new_status not in RequestStatus.ALL:
        raise BadRequest('Status must be Pending, Approved, Fulfilled, or Cancelled')

    blood_request = get_request(request_id)
    if blood_request.is_terminal:
        if new_status == blood_request.status:
            return blood_request
        if not override:
            raise InvalidOperation(f'Blood request #{request_id} is already {blood_request.status}')
        current_app.logger.warning('Overriding terminal status %s of blood request %s with %s',
                                   blood_request.status, request_id, new_status)

    with unit_of_work():
        blood_request.status = new_status

    _notify_status_change(blood_request, new_status)
    return blood_request


def _has_donation(request_id):
    return db.session.query(DonationRecord.query.filter_by(request_id=request_id).exists()).scalar()


def fulfill_by_donor(request_id, donor_id, blood_bank_id=None):
    blood_request = get_request(request_id)
    donor = get_donor_profile(donor_id)
    if blood_request.is_terminal:
        raise InvalidOperation(f'Blood request #{request_id} is already {blood_request.status}')
    # A request reopened with an override keeps the donation that fulfilled it
    if _has_donation(blood_request.id):
        raise InvalidOperation(f'Blood request #{request_id} already has a donation recorded')

    if blood_bank_id is not None:
        bank = get_blood_bank(blood_bank_id)
    else:
        bank = first_blood_bank()
        if not bank:
            raise InvalidOperation('No blood bank available')

    now = datetime.utcnow()
    try:
        with unit_of_work() as session:
            blood_request.status = RequestStatus.FULFILLED

            session.add(DonationRecord(
                donor_id=donor.id,
                blood_bank_id=bank.id,
                request_id=blood_request.id,
                donation_date=now,
                quantity=blood_request.quantity,
                status=DonationStatus.COMPLETED
            ))

            donor.last_donation_date = now
            donor.eligibility_status = False

            add_units(bank.id, donor.blood_group, blood_request.quantity)

            notify(donor.user_id,
                   f"Thank you for your donation! Blood request #{blood_request.id} has been fulfilled.")
            notify(blood_request.recipient.user_id,
                   f"Your blood request for {blood_request.blood_group_needed} "
                   f"({blood_request.quantity} units) has been fulfilled!")
    except IntegrityError:
        # Only a concurrent fulfilment is a workflow conflict; other violations propagate
        if _has_donation(request_id):
            raise InvalidOperation(f'Blood request #{request_id} already has a donation recorded') from None
        raise

    current_app.logger.info('Blood request %s fulfilled by donor %s at blood bank %s',
                            request_id, donor_id, bank.id)
    return blood_request


def donor_respond(request_id, donor_id, response):
    response = (response or '').lower()
    if response not in DONOR_RESPONSES:
        raise BadRequest("Response must be 'accept' or 'decline'")

    blood_request = get_request(request_id)
    donor = get_donor_profile(donor_id)
    link = DonorRequestLink.query.filter_by(donor_id=donor.id, request_id=blood_request.id).first()
    summary = f"blood request #{request_id} for {blood_request.blood_group_needed} ({blood_request.quantity} units)"
    now = datetime.utcnow()

    if response == 'accept':
        if blood_request.is_terminal:
            raise InvalidOperation(f'Blood request #{request_id} is already {blood_request.status}')
        with unit_of_work():
            blood_request.status = RequestStatus.APPROVED
            if link:
                link.response_status = ResponseStatus.ACCEPTED
                link.response_date = now
            notify_admins(f"Donor {donor.name} accepted {summary}.")
            notify(blood_request.recipient.user_id,
                   f"Good news! A donor has accepted your blood request for "
                   f"{blood_request.blood_group_needed} ({blood_request.quantity} units).")
    else:
        # Status stays as is, other donors may still accept
        with unit_of_work():
            if link:
                link.response_status = ResponseStatus.DECLINED
                link.response_date = now
            notify_first_admin(f"Donor {donor.name} declined {summary}.")

    return blood_request


def delete_request(request_id):
    blood_request = get_request(request_id)
    snapshot = blood_request.to_dict()
    with unit_of_work() as session:
        for donation in DonationRecord.query.filter_by(request_id=blood_request.id).all():
            donation.request_id = None
        session.flush()
        session.delete(blood_request)
    return snapshot
