from datetime import datetime

from werkzeug.exceptions import BadRequest, NotFound

from blood_donation.extensions import db
from blood_donation.errors import InvalidOperation
from blood_donation.models import Appointment, AppointmentStatus, RecipientProfile
from blood_donation.schemas import merge
from blood_donation.services.blood_bank_service import get_blood_bank
from blood_donation.services.donor_service import get_donor_profile
from blood_donation.services.notification_service import notify
from blood_donation.services.unit_of_work import unit_of_work

APPOINTMENT_FIELDS = ('appointment_date', 'blood_bank_id', 'status', 'remarks')


def list_appointments(donor_id=None, blood_bank_id=None, upcoming=False):
    query = Appointment.query
    if donor_id is not None:
        query = query.filter_by(donor_id=donor_id)
    if blood_bank_id is not None:
        query = query.filter_by(blood_bank_id=blood_bank_id)
    if upcoming:
        query = query.filter(Appointment.appointment_date > datetime.utcnow(),
                             Appointment.status == AppointmentStatus.SCHEDULED)
    return query.order_by(Appointment.appointment_date).all()


def get_appointment(appointment_id):
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment:
        raise NotFound(f'Appointment with Id {appointment_id} not found')
    return appointment


def schedule_appointment(donor_id, blood_bank_id, appointment_date, remarks=None):
    if appointment_date <= datetime.utcnow():
        raise InvalidOperation('Appointment date must be in the future')
    donor = get_donor_profile(donor_id)
    bank = get_blood_bank(blood_bank_id)

    when = appointment_date.strftime('%b %d, %Y at %I:%M %p')
    with unit_of_work() as session:
        appointment = Appointment(
            donor_id=donor.id,
            blood_bank_id=bank.id,
            appointment_date=appointment_date,
            status=AppointmentStatus.SCHEDULED,
            remarks=remarks
        )
        session.add(appointment)

        notify(donor.user_id, f"Appointment scheduled at {bank.name} on {when}. {remarks or ''}".strip())

        # Only recipients who need this donor's blood group
        recipients = RecipientProfile.query.filter_by(required_blood_group=donor.blood_group).all()
        for recipient in recipients:
            notify(recipient.user_id,
                   f"Good news! {donor.blood_group} blood donation appointment scheduled at {bank.name} "
                   f"on {when}. This matches your required blood type.")
    return appointment


def update_appointment_status(appointment_id, status):
    if status not in AppointmentStatus.ALL:
        raise BadRequest('Status must be one of: Scheduled, Completed, Cancelled, or Pending')
    appointment = get_appointment(appointment_id)
    with unit_of_work():
        appointment.status = status
    return appointment


def reschedule_appointment(appointment_id, command):
    """Apply the fields set on ``command``; a new date must still be in the future."""
    appointment = get_appointment(appointment_id)
    changes = command.model_dump(exclude_unset=True)
    if changes.get('appointment_date') is not None and changes['appointment_date'] <= datetime.utcnow():
        raise InvalidOperation('Appointment date must be in the future')
    if changes.get('blood_bank_id') is not None:
        get_blood_bank(changes['blood_bank_id'])

    current = {field: getattr(appointment, field) for field in APPOINTMENT_FIELDS}
    with unit_of_work():
        for field, value in merge(current, command).items():
            setattr(appointment, field, value)
    return appointment
