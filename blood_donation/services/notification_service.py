"""
Notification fan-out.

``notify`` and the admin helpers only add rows to the current session; the
caller's unit of work decides when they are committed, so notifications land
in the same transaction as the state change they describe.
"""

from datetime import datetime

from werkzeug.exceptions import NotFound

from blood_donation.extensions import db
from blood_donation.models import NotificationLog, User, UserRole
from blood_donation.services.unit_of_work import unit_of_work

MAX_MESSAGE_LENGTH = 250


def notify(user_id, message):
    notification = NotificationLog(
        user_id=user_id,
        message=message[:MAX_MESSAGE_LENGTH],
        is_read=False,
        created_at=datetime.utcnow()
    )
    db.session.add(notification)
    return notification


def get_admins():
    return User.query.filter_by(role=UserRole.ADMIN).order_by(User.id).all()


def notify_admins(message):
    admins = get_admins()
    for admin in admins:
        notify(admin.id, message)
    return len(admins)


def notify_first_admin(message):
    admin = User.query.filter_by(role=UserRole.ADMIN).order_by(User.id).first()
    if not admin:
        return None
    return notify(admin.id, message)


def create_notification(user_id, message):
    if not db.session.get(User, user_id):
        raise NotFound(f'User with Id {user_id} not found')
    with unit_of_work():
        notification = notify(user_id, message)
    return notification


def list_notifications(user_id=None, unread_only=False):
    query = NotificationLog.query
    if user_id is not None:
        query = query.filter_by(user_id=user_id)
    if unread_only:
        query = query.filter_by(is_read=False)
    return query.order_by(NotificationLog.created_at.desc(), NotificationLog.id.desc()).all()


def get_notification(notification_id):
    notification = db.session.get(NotificationLog, notification_id)
    if not notification:
        raise NotFound(f'Notification with Id {notification_id} not found')
    return notification


def mark_as_read(notification_id):
    notification = get_notification(notification_id)
    with unit_of_work():
        notification.is_read = True
    return notification


def unread_count(user_id):
    return NotificationLog.query.filter_by(user_id=user_id, is_read=False).count()
