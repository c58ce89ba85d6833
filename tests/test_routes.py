from betterplay import db
from betterplay.models import Booking
from conftest import MONDAY, auth_header

def slots_url(venue, suffix=''):
    return f'/venues/{venue.id}/spaces/court-1{suffix}'

def test_list_timeslots(client, init_data):
    _, _, _, venue = init_data
    resp = client.get(slots_url(venue, '/timeslots'), query_string={'date': MONDAY})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['spaceName'] == 'Court 1'
    assert [s['startTime'] for s in data['slots']] == ['09:00', '10:00', '11:00']

def test_list_timeslots_errors(client, init_data):
    _, _, _, venue = init_data
    assert client.get(f'/venues/{venue.id}/spaces/pool/timeslots').status_code == 404
    assert client.get('/venues/999/spaces/court-1/timeslots').status_code == 404
    resp = client.get(slots_url(venue, '/timeslots'), query_string={'startDate': MONDAY})
    assert resp.status_code == 400
    assert 'error' in resp.get_json()

def test_slot_routes_require_admin(app, client, init_data):
    _, user, _, venue = init_data
    body = {'date': MONDAY, 'startTime': '14:00', 'endTime': '15:00', 'price': 100}

    assert client.post(slots_url(venue, '/slots'), json=body).status_code == 401
    resp = client.post(slots_url(venue, '/slots'), json=body,
                       headers={'Authorization': 'Bearer not-a-token'})
    assert resp.status_code == 401
    resp = client.post(slots_url(venue, '/slots'), json=body, headers=auth_header(app, user))
    assert resp.status_code == 403

def test_custom_slot_lifecycle(app, client, init_data):
    admin, user, _, venue = init_data
    headers = auth_header(app, admin)

    resp = client.post(slots_url(venue, '/slots'), headers=headers,
                       json={'date': MONDAY, 'startTime': '14:00', 'endTime': '15:00', 'price': 100})
    assert resp.status_code == 201
    slot = resp.get_json()
    assert slot['isCustom'] is True

    resp = client.post(slots_url(venue, '/slots'), headers=headers,
                       json={'date': MONDAY, 'startTime': '14:30', 'endTime': '15:30'})
    assert resp.status_code == 409

    resp = client.post(slots_url(venue, '/slots'), headers=headers,
                       json={'date': MONDAY, 'startTime': '15:00', 'endTime': '16:00'})
    assert resp.status_code == 201

    resp = client.post(slots_url(venue, '/slots'), headers=headers,
                       json={'date': MONDAY, 'startTime': '3pm', 'endTime': '16:00'})
    assert resp.status_code == 400

    resp = client.post(slots_url(venue, '/book'), headers=auth_header(app, user),
                       json={'date': MONDAY, 'startTime': '14:00', 'endTime': '15:00', 'eventName': 'Scrimmage'})
    assert resp.status_code == 201
    booking_id = resp.get_json()['id']

    resp = client.put(slots_url(venue, f"/slots/{slot['id']}"), headers=headers, json={'startTime': '13:00'})
    assert resp.status_code == 409
    resp = client.put(slots_url(venue, f"/slots/{slot['id']}"), headers=headers, json={'price': 120})
    assert resp.status_code == 200
    assert resp.get_json()['price'] == 120

    assert client.delete(slots_url(venue, f"/slots/{slot['id']}"), headers=headers).status_code == 409

    resp = client.patch(f'/bookings/{booking_id}/cancel', headers=auth_header(app, user))
    assert resp.status_code == 200
    assert resp.get_json()['booking']['status'] == 'cancelled'

    assert client.delete(slots_url(venue, f"/slots/{slot['id']}"), headers=headers).status_code == 200
    assert client.delete(slots_url(venue, f"/slots/{slot['id']}"), headers=headers).status_code == 404

def test_generate_slots_route(app, client, init_data):
    admin, _, _, venue = init_data
    resp = client.post(slots_url(venue, '/generate-slots'), headers=auth_header(app, admin),
                       json={'startDate': MONDAY, 'endDate': MONDAY, 'price': 90})
    assert resp.status_code == 201
    data = resp.get_json()
    assert data['created'] == 3
    assert data['skipped'] == 0
    assert len(data['slots']) == 3

    resp = client.post(slots_url(venue, '/generate-slots'), headers=auth_header(app, admin), json={'startDate': MONDAY})
    assert resp.status_code == 400

def test_generate_slots_route_rejects_negative_price(app, client, init_data):
    admin, _, _, venue = init_data
    resp = client.post(slots_url(venue, '/generate-slots'), headers=auth_header(app, admin),
                       json={'startDate': MONDAY, 'endDate': MONDAY, 'price': -50})
    assert resp.status_code == 400
    assert 'negative' in resp.get_json()['error']

def test_update_slot_is_active_must_be_json_boolean(app, client, init_data):
    admin, _, _, venue = init_data
    headers = auth_header(app, admin)
    slot = client.post(slots_url(venue, '/slots'), headers=headers,
                       json={'date': MONDAY, 'startTime': '14:00', 'endTime': '15:00'}).get_json()

    resp = client.put(slots_url(venue, f"/slots/{slot['id']}"), headers=headers, json={'isActive': 'false'})
    assert resp.status_code == 400

    resp = client.put(slots_url(venue, f"/slots/{slot['id']}"), headers=headers, json={'isActive': False})
    assert resp.status_code == 200
    assert resp.get_json()['isActive'] is False

def test_booking_routes(app, client, init_data):
    _, user, other, venue = init_data
    body = {'date': MONDAY, 'startTime': '10:00', 'endTime': '11:00', 'eventName': 'Pickup game', 'notes': 'bring balls'}

    assert client.post(slots_url(venue, '/book'), json=body).status_code == 401

    resp = client.post(slots_url(venue, '/book'), json=body, headers=auth_header(app, user))
    assert resp.status_code == 201
    booking = resp.get_json()
    assert booking['status'] == 'pending'
    assert booking['notes'] == 'bring balls'

    resp = client.post(slots_url(venue, '/book'), json=body, headers=auth_header(app, other))
    assert resp.status_code == 409

    resp = client.post(slots_url(venue, '/book'), json={'date': MONDAY}, headers=auth_header(app, user))
    assert resp.status_code == 400

    resp = client.post(f'/venues/{venue.id}/spaces/pool/book', json=body, headers=auth_header(app, user))
    assert resp.status_code == 404

    assert client.patch(f"/bookings/{booking['id']}/cancel").status_code == 401
    assert client.patch(f"/bookings/{booking['id']}/cancel", headers=auth_header(app, other)).status_code == 403
    assert client.patch('/bookings/999/cancel', headers=auth_header(app, user)).status_code == 404

    resp = client.get('/bookings/my_bookings', headers=auth_header(app, user))
    assert [b['id'] for b in resp.get_json()] == [booking['id']]

def test_booking_status_route(app, client, init_data):
    admin, user, _, venue = init_data
    resp = client.post(slots_url(venue, '/book'), headers=auth_header(app, user),
                       json={'date': MONDAY, 'startTime': '10:00', 'endTime': '11:00', 'eventName': 'Game'})
    booking_id = resp.get_json()['id']

    url = f'/bookings/{booking_id}/status'
    assert client.patch(url, json={'status': 'confirmed'}, headers=auth_header(app, user)).status_code == 403
    resp = client.patch(url, json={'status': 'confirmed'}, headers=auth_header(app, admin))
    assert resp.status_code == 200
    assert db.session.get(Booking, booking_id).status == 'confirmed'
    assert client.patch(url, json={'status': 'bogus'}, headers=auth_header(app, admin)).status_code == 400

def test_auth_flow(client, init_data):
    resp = client.post('/auth/register', json={'username': 'newbie', 'email': 'new@test.com', 'password': 's3cret'})
    assert resp.status_code == 201
    assert resp.get_json()['token']

    assert client.post('/auth/register', json={'username': 'newbie', 'email': 'x@test.com', 'password': 'x'}).status_code == 400

    resp = client.post('/auth/login', json={'username': 'newbie', 'password': 's3cret'})
    assert resp.status_code == 200
    token = resp.get_json()['token']
    assert client.get('/bookings/my_bookings', headers={'Authorization': f'Bearer {token}'}).status_code == 200

    assert client.post('/auth/login', json={'username': 'newbie', 'password': 'wrong'}).status_code == 401

def test_unknown_route_is_json(client):
    resp = client.get('/nowhere')
    assert resp.status_code == 404
    assert 'error' in resp.get_json()
