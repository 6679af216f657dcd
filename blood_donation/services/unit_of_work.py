from contextlib import contextmanager

from blood_donation.extensions import db


@contextmanager
def unit_of_work():
    """Commit everything added inside the block at once, or roll all of it back."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
