from blood_donation.extensions import db


class BloodBank(db.Model):
    __tablename__ = 'blood_banks'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    location = db.Column(db.String(100), nullable=False)
    contact_number = db.Column(db.String(15), nullable=False)
    email = db.Column(db.String(100), nullable=False)
    capacity = db.Column(db.Integer, nullable=False)
    managed_by = db.Column(db.String(50))

    stocks = db.relationship('BloodStock', back_populates='blood_bank', lazy=True)
    donations = db.relationship('DonationRecord', back_populates='blood_bank', lazy=True)
    appointments = db.relationship('Appointment', back_populates='blood_bank', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'location': self.location,
            'contact_number': self.contact_number,
            'email': self.email,
            'capacity': self.capacity,
            'managed_by': self.managed_by
        }

    def __repr__(self):
        return f'<BloodBank {self.name}>'
