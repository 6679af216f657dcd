from datetime import datetime
from blood_donation.extensions import db


class RequestStatus:
    PENDING = 'Pending'
    APPROVED = 'Approved'
    FULFILLED = 'Fulfilled'
    CANCELLED = 'Cancelled'

    ALL = (PENDING, APPROVED, FULFILLED, CANCELLED)
    TERMINAL = (FULFILLED, CANCELLED)


class BloodRequest(db.Model):
    __tablename__ = 'blood_requests'
    __table_args__ = (
        db.CheckConstraint('quantity BETWEEN 1 AND 10', name='ck_blood_request_quantity'),
    )

    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(db.Integer, db.ForeignKey('recipient_profiles.id'), nullable=False)
    blood_group_needed = db.Column(db.String(5), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    request_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    status = db.Column(db.Enum(*RequestStatus.ALL, name='request_status'), nullable=False,
                       default=RequestStatus.PENDING)

    recipient = db.relationship('RecipientProfile', back_populates='blood_requests')
    donor_links = db.relationship('DonorRequestLink', back_populates='request', lazy=True,
                                  cascade='all, delete-orphan')

    @property
    def is_terminal(self):
        return self.status in RequestStatus.TERMINAL

    def to_dict(self):
        recipient = self.recipient
        return {
            'id': self.id,
            'recipient_id': self.recipient_id,
            'recipient_name': recipient.name if recipient else '',
            'hospital_name': recipient.hospital_name if recipient else 'Unknown Hospital',
            'blood_group_needed': self.blood_group_needed,
            'quantity': self.quantity,
            'request_date': self.request_date.isoformat() if self.request_date else None,
            'status': self.status,
            'linked_donors_count': len(self.donor_links)
        }

    def __repr__(self):
        return f'<BloodRequest {self.id} {self.blood_group_needed} {self.status}>'
