from datetime import datetime
from blood_donation.extensions import db


class UserRole:
    ADMIN = 'Admin'
    DONOR = 'Donor'
    RECIPIENT = 'Recipient'

    ALL = (ADMIN, DONOR, RECIPIENT)


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(50))
    last_name = db.Column(db.String(50))
    username = db.Column(db.String(50), nullable=False, unique=True)
    email = db.Column(db.String(100), nullable=False, unique=True)
    phone = db.Column(db.String(15))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(*UserRole.ALL, name='user_role'), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    donor_profile = db.relationship('DonorProfile', back_populates='user', uselist=False)
    recipient_profile = db.relationship('RecipientProfile', back_populates='user', uselist=False)
    notifications = db.relationship('NotificationLog', back_populates='user', lazy=True)

    @property
    def full_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def to_dict(self):
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'username': self.username,
            'email': self.email,
            'phone': self.phone,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<User {self.username}>'
