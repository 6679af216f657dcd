from datetime import datetime
from blood_donation.extensions import db


class DonationStatus:
    COMPLETED = 'Completed'
    PENDING = 'Pending'
    CANCELLED = 'Cancelled'
    REJECTED = 'Rejected'

    ALL = (COMPLETED, PENDING, CANCELLED, REJECTED)


class DonationRecord(db.Model):
    __tablename__ = 'donation_records'

    id = db.Column(db.Integer, primary_key=True)
    donor_id = db.Column(db.Integer, db.ForeignKey('donor_profiles.id'), nullable=False)
    blood_bank_id = db.Column(db.Integer, db.ForeignKey('blood_banks.id'), nullable=False)
    # Set when the donation fulfilled a request; one donation per request
    request_id = db.Column(db.Integer, db.ForeignKey('blood_requests.id'), unique=True)
    donation_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    quantity = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(50), nullable=False, default=DonationStatus.COMPLETED)

    donor = db.relationship('DonorProfile', back_populates='donations')
    blood_bank = db.relationship('BloodBank', back_populates='donations')

    def to_dict(self):
        return {
            'id': self.id,
            'donor_id': self.donor_id,
            'donor_name': self.donor.name if self.donor else '',
            'blood_group': self.donor.blood_group if self.donor else 'Unknown',
            'blood_bank_id': self.blood_bank_id,
            'blood_bank_name': self.blood_bank.name if self.blood_bank else 'Unknown',
            'request_id': self.request_id,
            'donation_date': self.donation_date.isoformat() if self.donation_date else None,
            'quantity': self.quantity,
            'status': self.status
        }
