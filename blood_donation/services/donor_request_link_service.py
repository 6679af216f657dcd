from werkzeug.exceptions import NotFound

from blood_donation.extensions import db
from blood_donation.models import DonorRequestLink
from blood_donation.services.blood_request_service import donor_respond


def list_links(donor_id=None, request_id=None, response_status=None):
    query = DonorRequestLink.query
    if donor_id is not None:
        query = query.filter_by(donor_id=donor_id)
    if request_id is not None:
        query = query.filter_by(request_id=request_id)
    if response_status:
        query = query.filter_by(response_status=response_status)
    return query.order_by(DonorRequestLink.linked_at.desc(), DonorRequestLink.id.desc()).all()


def get_link(link_id):
    link = db.session.get(DonorRequestLink, link_id)
    if not link:
        raise NotFound(f'Link with Id {link_id} not found')
    return link


def respond_to_link(link_id, response):
    link = get_link(link_id)
    donor_respond(link.request_id, link.donor_id, response)
    return link
