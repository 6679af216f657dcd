from blood_donation.extensions import db


class DonorProfile(db.Model):
    __tablename__ = 'donor_profiles'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, unique=True)
    blood_group = db.Column(db.String(5), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    gender = db.Column(db.String(20), nullable=False)
    last_donation_date = db.Column(db.DateTime)
    # Matching reads this flag; it is recomputed from last_donation_date on writes and by the refresh job
    eligibility_status = db.Column(db.Boolean, nullable=False, default=True)

    user = db.relationship('User', back_populates='donor_profile')
    donations = db.relationship('DonationRecord', back_populates='donor', lazy=True)
    request_links = db.relationship('DonorRequestLink', back_populates='donor', lazy=True)
    appointments = db.relationship('Appointment', back_populates='donor', lazy=True)

    @property
    def name(self):
        return self.user.full_name if self.user else ''

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'blood_group': self.blood_group,
            'age': self.age,
            'gender': self.gender,
            'last_donation_date': self.last_donation_date.isoformat() if self.last_donation_date else None,
            'eligibility_status': self.eligibility_status
        }

    def __repr__(self):
        return f'<DonorProfile {self.id} {self.blood_group}>'
