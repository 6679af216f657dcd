from datetime import datetime, timedelta

DEFAULT_COOLDOWN_DAYS = 90


def days_since(moment, now=None):
    now = now or datetime.utcnow()
    return (now - moment).days


def is_eligible(last_donation_date, now=None, cooldown_days=DEFAULT_COOLDOWN_DAYS):
    """A donor who never donated is eligible; otherwise the cooldown must have elapsed."""
    if last_donation_date is None:
        return True
    return days_since(last_donation_date, now) >= cooldown_days


def next_eligible_date(last_donation_date, cooldown_days=DEFAULT_COOLDOWN_DAYS):
    if last_donation_date is None:
        return None
    return last_donation_date + timedelta(days=cooldown_days)
