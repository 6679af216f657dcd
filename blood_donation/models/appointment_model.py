from datetime import datetime
from blood_donation.extensions import db


class AppointmentStatus:
    SCHEDULED = 'Scheduled'
    COMPLETED = 'Completed'
    CANCELLED = 'Cancelled'
    PENDING = 'Pending'

    ALL = (SCHEDULED, COMPLETED, CANCELLED, PENDING)


class Appointment(db.Model):
    __tablename__ = 'appointments'

    id = db.Column(db.Integer, primary_key=True)
    donor_id = db.Column(db.Integer, db.ForeignKey('donor_profiles.id'), nullable=False)
    blood_bank_id = db.Column(db.Integer, db.ForeignKey('blood_banks.id'), nullable=False)
    appointment_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.Enum(*AppointmentStatus.ALL, name='appointment_status'), nullable=False,
                       default=AppointmentStatus.SCHEDULED)
    remarks = db.Column(db.String(200))

    donor = db.relationship('DonorProfile', back_populates='appointments')
    blood_bank = db.relationship('BloodBank', back_populates='appointments')

    def to_dict(self):
        return {
            'id': self.id,
            'donor_id': self.donor_id,
            'donor_name': self.donor.name if self.donor else '',
            'blood_group': self.donor.blood_group if self.donor else 'Unknown',
            'blood_bank_id': self.blood_bank_id,
            'blood_bank_name': self.blood_bank.name if self.blood_bank else 'Unknown',
            'appointment_date': self.appointment_date.isoformat(),
            'status': self.status,
            'remarks': self.remarks
        }
