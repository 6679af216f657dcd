from datetime import datetime, timedelta

from blood_donation.extensions import db
from blood_donation.models import User
from blood_donation.services.user_service import check_password

REQUESTS_URL = '/api/v1/bloodrequests/'


def test_health(client):
    response = client.get('/api/health')

    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_register_user_hashes_password(client, app):
    response = client.post('/api/v1/users/', json={
        'first_name': 'Amina',
        'last_name': 'Okello',
        'username': 'amina',
        'email': 'amina@example.com',
        'password': 'secret123',
        'role': 'Donor'
    })

    assert response.status_code == 201
    body = response.get_json()
    assert 'password' not in body and 'password_hash' not in body

    user = db.session.get(User, body['id'])
    assert user.password_hash != 'secret123'
    assert check_password(user, 'secret123')

    duplicate = client.post('/api/v1/users/', json={
        'first_name': 'Amina',
        'last_name': 'Okello',
        'username': 'amina',
        'email': 'other@example.com',
        'password': 'secret123',
        'role': 'Donor'
    })
    assert duplicate.status_code == 409


def test_create_request(client, make_admin, make_recipient, make_donor):
    make_admin()
    recipient = make_recipient('B+')
    make_donor('B+')
    make_donor('B+')

    response = client.post(REQUESTS_URL, json={
        'recipient_user_id': recipient.user_id, 'blood_group_needed': 'B+', 'quantity': 2
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body['status'] == 'Pending'
    assert body['linked_donors_count'] == 2
    assert body['hospital_name'] == 'General Hospital'


def test_create_request_validation(client, make_recipient, make_user):
    recipient = make_recipient('B+')

    missing_body = client.post(REQUESTS_URL, data='', content_type='application/json')
    assert missing_body.status_code == 400
    assert missing_body.get_json()['error'] == 'No input data provided'

    bad_quantity = client.post(REQUESTS_URL, json={
        'recipient_user_id': recipient.user_id, 'blood_group_needed': 'B+', 'quantity': 11
    })
    assert bad_quantity.status_code == 400
    assert bad_quantity.get_json()['details'][0]['field'] == 'quantity'

    bad_group = client.post(REQUESTS_URL, json={
        'recipient_user_id': recipient.user_id, 'blood_group_needed': 'C+', 'quantity': 1
    })
    assert bad_group.status_code == 400

    no_profile = client.post(REQUESTS_URL, json={
        'recipient_user_id': make_user().id, 'blood_group_needed': 'B+', 'quantity': 1
    })
    assert no_profile.status_code == 409


def test_missing_resources_return_404(client):
    assert client.get(f'{REQUESTS_URL}999').status_code == 404
    assert client.put(f'{REQUESTS_URL}999', json={'status': 'Approved'}).status_code == 404
    assert client.get('/api/v1/donors/999').status_code == 404
    response = client.get('/api/v1/notifications/999')
    assert response.status_code == 404
    assert 'not found' in response.get_json()['error']


def test_status_flow_and_terminal_guard(client, make_recipient, make_donor):
    recipient = make_recipient('O+')
    make_donor('O+')
    request_id = client.post(REQUESTS_URL, json={
        'recipient_user_id': recipient.user_id, 'blood_group_needed': 'O+', 'quantity': 1
    }).get_json()['id']

    approved = client.put(f'{REQUESTS_URL}{request_id}', json={'status': 'Approved'})
    assert approved.status_code == 200
    assert approved.get_json()['status'] == 'Approved'

    cancelled = client.put(f'{REQUESTS_URL}{request_id}', json={'status': 'Cancelled'})
    assert cancelled.get_json()['status'] == 'Cancelled'

    reopened = client.put(f'{REQUESTS_URL}{request_id}', json={'status': 'Pending'})
    assert reopened.status_code == 409

    invalid = client.put(f'{REQUESTS_URL}{request_id}', json={'status': 'Lost'})
    assert invalid.status_code == 400

    forced = client.put(f'{REQUESTS_URL}{request_id}', json={'status': 'Pending', 'override': True})
    assert forced.status_code == 200
    assert forced.get_json()['status'] == 'Pending'


def test_fulfill_then_fulfill_again(client, make_recipient, make_donor, make_bank):
    recipient = make_recipient('A-')
    donor = make_donor('A-')
    bank = make_bank()
    request_id = client.post(REQUESTS_URL, json={
        'recipient_user_id': recipient.user_id, 'blood_group_needed': 'A-', 'quantity': 3
    }).get_json()['id']

    fulfilled = client.post(f'{REQUESTS_URL}{request_id}/fulfill', json={'donor_id': donor.id})
    assert fulfilled.status_code == 200
    assert fulfilled.get_json()['status'] == 'Fulfilled'

    donations = client.get(f'/api/v1/donations/?donor_id={donor.id}').get_json()
    assert len(donations) == 1
    assert donations[0]['request_id'] == request_id
    assert donations[0]['blood_bank_id'] == bank.id

    stocks = client.get(f'/api/v1/bloodstocks/?blood_bank_id={bank.id}').get_json()
    assert [(s['blood_group'], s['units_available']) for s in stocks] == [('A-', 3)]

    again = client.post(f'{REQUESTS_URL}{request_id}/fulfill', json={'donor_id': donor.id})
    assert again.status_code == 409


def test_donor_responds_through_link(client, make_admin, make_recipient, make_donor):
    admin = make_admin()
    recipient = make_recipient('AB+')
    donor = make_donor('AB+')
    request_id = client.post(REQUESTS_URL, json={
        'recipient_user_id': recipient.user_id, 'blood_group_needed': 'AB+', 'quantity': 1
    }).get_json()['id']

    links = client.get(f'/api/v1/donorrequestlinks/?request_id={request_id}').get_json()
    assert [link['donor_id'] for link in links] == [donor.id]

    answered = client.post(f"/api/v1/donorrequestlinks/{links[0]['id']}/respond", json={'response': 'Accept'})
    assert answered.status_code == 200
    assert answered.get_json()['response_status'] == 'Accepted'
    assert answered.get_json()['request_status'] == 'Approved'

    bad = client.post(f'{REQUESTS_URL}{request_id}/respond', json={'donor_id': donor.id, 'response': 'maybe'})
    assert bad.status_code == 400

    unread = client.get(f'/api/v1/notifications/?user_id={admin.id}&unread=true').get_json()
    assert any('accepted blood request' in n['message'] for n in unread)


def test_notifications_unread_count_and_mark_read(client, make_user):
    user = make_user()
    created = client.post('/api/v1/notifications/', json={'user_id': user.id, 'message': 'Clinic opens at 9am'})
    assert created.status_code == 201
    notification_id = created.get_json()['id']

    count_url = f'/api/v1/notifications/user/{user.id}/unread-count'
    assert client.get(count_url).get_json()['unread_count'] == 1

    marked = client.put(f'/api/v1/notifications/{notification_id}/read')
    assert marked.status_code == 200
    assert marked.get_json()['is_read'] is True
    assert client.get(count_url).get_json()['unread_count'] == 0


def test_stock_levels_are_labelled(client, make_bank):
    bank = make_bank()

    created = client.post('/api/v1/bloodstocks/', json={
        'blood_bank_id': bank.id, 'blood_group': 'O-', 'units_available': 4
    })
    assert created.status_code == 201
    assert created.get_json()['availability_status'] == 'Low Stock'

    stock_url = f"/api/v1/bloodstocks/{created.get_json()['id']}"
    assert client.put(stock_url, json={'units_available': 0}).get_json()['availability_status'] == 'Out of Stock'
    assert client.put(stock_url, json={'units_available': 15}).get_json()['availability_status'] == 'Moderate Stock'
    assert client.put(stock_url, json={'units_available': 21}).get_json()['availability_status'] == 'Good Stock'

    duplicate = client.post('/api/v1/bloodstocks/', json={
        'blood_bank_id': bank.id, 'blood_group': 'O-', 'units_available': 1
    })
    assert duplicate.status_code == 409


def test_walk_in_donation_status_codes(client, make_donor, make_bank):
    donor = make_donor()
    bank = make_bank()
    payload = {'donor_id': donor.id, 'blood_bank_id': bank.id, 'quantity': 1}

    assert client.post('/api/v1/donations/', json=payload).status_code == 201
    assert client.post('/api/v1/donations/', json=payload).status_code == 200
    assert client.post('/api/v1/donations/', json={**payload, 'quantity': 6}).status_code == 400


def test_schedule_and_cancel_appointment(client, make_donor, make_bank):
    donor = make_donor()
    bank = make_bank()
    when = (datetime.utcnow() + timedelta(days=5)).replace(microsecond=0)

    created = client.post('/api/v1/appointments/', json={
        'donor_id': donor.id, 'blood_bank_id': bank.id, 'appointment_date': when.isoformat()
    })
    assert created.status_code == 201
    body = created.get_json()
    assert body['status'] == 'Scheduled'
    assert body['appointment_date'] == when.isoformat()

    cancelled = client.post(f"/api/v1/appointments/{body['id']}/cancel")
    assert cancelled.get_json()['status'] == 'Cancelled'

    past = client.post('/api/v1/appointments/', json={
        'donor_id': donor.id, 'blood_bank_id': bank.id,
        'appointment_date': (datetime.utcnow() - timedelta(days=1)).isoformat()
    })
    assert past.status_code == 409


def test_request_recipient_fields_are_profile_ids(client, make_recipient):
    recipient = make_recipient('A+')
    make_recipient('A+')

    created = client.post(REQUESTS_URL, json={
        'recipient_user_id': recipient.user_id, 'blood_group_needed': 'A+', 'quantity': 1
    }).get_json()

    assert created['recipient_id'] == recipient.id
    listed = client.get(f'{REQUESTS_URL}?recipient_id={recipient.id}').get_json()
    assert [item['id'] for item in listed] == [created['id']]


def test_update_and_delete_user(client, make_user):
    user = make_user(first_name='Grace')

    updated = client.put(f'/api/v1/users/{user.id}', json={'last_name': 'Akello', 'role': 'Admin'})
    assert updated.status_code == 200
    assert updated.get_json()['last_name'] == 'Akello'
    assert updated.get_json()['first_name'] == 'Grace'
    assert updated.get_json()['role'] == 'Donor'

    deleted = client.delete(f'/api/v1/users/{user.id}')
    assert deleted.status_code == 200
    assert deleted.get_json()['user']['id'] == user.id
    assert client.get(f'/api/v1/users/{user.id}').status_code == 404


def test_delete_recipient(client, make_recipient):
    recipient = make_recipient()

    assert client.delete(f'/api/v1/recipients/{recipient.id}').status_code == 200
    assert client.get(f'/api/v1/recipients/{recipient.id}').status_code == 404


def test_blood_banks_by_location_and_duplicates(client):
    payload = {'name': 'City Blood Bank', 'location': 'Kampala Road', 'contact_number': '9876543210',
               'email': 'city@example.com', 'capacity': 300}

    assert client.post('/api/v1/bloodbanks/', json=payload).status_code == 201
    assert client.post('/api/v1/bloodbanks/', json=payload).status_code == 409
    assert client.post('/api/v1/bloodbanks/', json={**payload, 'location': 'Gulu Town'}).status_code == 201

    found = client.get('/api/v1/bloodbanks/?location=gulu').get_json()
    assert [bank['location'] for bank in found] == ['Gulu Town']


def test_reschedule_appointment(client, make_donor, make_bank):
    donor = make_donor()
    bank = make_bank()
    other_bank = make_bank('Second Bank')
    created = client.post('/api/v1/appointments/', json={
        'donor_id': donor.id, 'blood_bank_id': bank.id,
        'appointment_date': (datetime.utcnow() + timedelta(days=2)).isoformat()
    }).get_json()
    later = (datetime.utcnow() + timedelta(days=7)).replace(microsecond=0)

    moved = client.put(f"/api/v1/appointments/{created['id']}", json={
        'appointment_date': later.isoformat(), 'blood_bank_id': other_bank.id
    })
    assert moved.status_code == 200
    assert moved.get_json()['appointment_date'] == later.isoformat()
    assert moved.get_json()['blood_bank_id'] == other_bank.id

    by_bank = client.get(f'/api/v1/appointments/?blood_bank_id={other_bank.id}').get_json()
    assert [item['id'] for item in by_bank] == [created['id']]

    bad_status = client.put(f"/api/v1/appointments/{created['id']}", json={'status': 'Lost'})
    assert bad_status.status_code == 400


def test_update_donation_status(client, make_donor, make_bank):
    donor = make_donor()
    bank = make_bank()
    donation = client.post('/api/v1/donations/', json={
        'donor_id': donor.id, 'blood_bank_id': bank.id, 'quantity': 1
    }).get_json()

    updated = client.put(f"/api/v1/donations/{donation['id']}/status", json={'status': 'Cancelled'})
    assert updated.status_code == 200
    assert updated.get_json()['status'] == 'Cancelled'
    assert client.put(f"/api/v1/donations/{donation['id']}/status", json={'status': 'Lost'}).status_code == 400
