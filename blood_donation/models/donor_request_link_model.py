from datetime import datetime
from blood_donation.extensions import db


class ResponseStatus:
    PENDING = 'Pending'
    ACCEPTED = 'Accepted'
    DECLINED = 'Declined'

    ALL = (PENDING, ACCEPTED, DECLINED)


class DonorRequestLink(db.Model):
    __tablename__ = 'donor_request_links'
    __table_args__ = (
        db.UniqueConstraint('donor_id', 'request_id', name='uq_donor_request_link'),
    )

    id = db.Column(db.Integer, primary_key=True)
    donor_id = db.Column(db.Integer, db.ForeignKey('donor_profiles.id'), nullable=False)
    request_id = db.Column(db.Integer, db.ForeignKey('blood_requests.id'), nullable=False)
    linked_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    response_status = db.Column(db.Enum(*ResponseStatus.ALL, name='link_response_status'), nullable=False,
                                default=ResponseStatus.PENDING)
    response_date = db.Column(db.DateTime)

    donor = db.relationship('DonorProfile', back_populates='request_links')
    request = db.relationship('BloodRequest', back_populates='donor_links')

    def to_dict(self):
        donor = self.donor
        blood_request = self.request
        recipient = blood_request.recipient if blood_request else None
        return {
            'id': self.id,
            'donor_id': self.donor_id,
            'donor_name': donor.name if donor else '',
            'blood_group': donor.blood_group if donor else 'Unknown',
            'request_id': self.request_id,
            'recipient_name': recipient.name if recipient else '',
            'hospital_name': recipient.hospital_name if recipient else 'Unknown',
            'quantity_needed': blood_request.quantity if blood_request else 0,
            'request_status': blood_request.status if blood_request else 'Unknown',
            'linked_at': self.linked_at.isoformat() if self.linked_at else None,
            'response_status': self.response_status,
            'response_date': self.response_date.isoformat() if self.response_date else None
        }
