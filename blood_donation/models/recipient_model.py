from blood_donation.extensions import db


class RecipientProfile(db.Model):
    __tablename__ = 'recipient_profiles'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, unique=True)
    hospital_name = db.Column(db.String(100), nullable=False)
    patient_name = db.Column(db.String(100), nullable=False)
    required_blood_group = db.Column(db.String(5), nullable=False)
    contact_number = db.Column(db.String(15), nullable=False)

    user = db.relationship('User', back_populates='recipient_profile')
    blood_requests = db.relationship('BloodRequest', back_populates='recipient', lazy=True)

    @property
    def name(self):
        return self.user.full_name if self.user else ''

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'hospital_name': self.hospital_name,
            'patient_name': self.patient_name,
            'required_blood_group': self.required_blood_group,
            'contact_number': self.contact_number
        }
