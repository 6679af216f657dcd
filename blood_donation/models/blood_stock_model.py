from datetime import datetime
from blood_donation.extensions import db


class BloodStock(db.Model):
    __tablename__ = 'blood_stocks'
    __table_args__ = (
        db.UniqueConstraint('blood_bank_id', 'blood_group', name='uq_blood_stock_bank_group'),
        db.CheckConstraint('units_available >= 0', name='ck_blood_stock_units_non_negative'),
    )

    id = db.Column(db.Integer, primary_key=True)
    blood_bank_id = db.Column(db.Integer, db.ForeignKey('blood_banks.id'), nullable=False)
    blood_group = db.Column(db.String(5), nullable=False)
    units_available = db.Column(db.Integer, nullable=False, default=0)
    last_updated = db.Column(db.DateTime, default=datetime.utcnow)

    blood_bank = db.relationship('BloodBank', back_populates='stocks')

    @property
    def availability_status(self):
        if self.units_available == 0:
            return 'Out of Stock'
        if self.units_available <= 5:
            return 'Low Stock'
        if self.units_available <= 20:
            return 'Moderate Stock'
        return 'Good Stock'

    def to_dict(self):
        return {
            'id': self.id,
            'blood_bank_id': self.blood_bank_id,
            'blood_bank_name': self.blood_bank.name if self.blood_bank else 'Unknown',
            'blood_group': self.blood_group,
            'units_available': self.units_available,
            'last_updated': self.last_updated.isoformat() if self.last_updated else None,
            'availability_status': self.availability_status
        }
