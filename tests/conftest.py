import jwt
import pytest
from werkzeug.security import generate_password_hash

from betterplay import create_app, db
from betterplay.config import TestingConfig
from betterplay.models import User, Venue, Space

# 2030-01-07 is a Monday
MONDAY = '2030-01-07'
TUESDAY = '2030-01-08'
SUNDAY = '2030-01-06'

@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def init_data(app):
    admin = User(username='admin', email='admin@test.com', role='admin',
                 password_hash=generate_password_hash('password'))
    user = User(username='test', email='test@test.com', role='user',
                password_hash=generate_password_hash('password'))
    other = User(username='other', email='other@test.com', role='user')
    venue = Venue(
        name='Riverside',
        type='sports_complex',
        city='Springfield',
        operating_hours={
            'monday': {'open': '09:00', 'close': '12:00'},
            'tuesday': {'open': '9:30 AM', 'close': '5:00 PM'},
            'sunday': None
        }
    )
    venue.spaces = [Space(id='court-1', name='Court 1', type='basketball', capacity=10)]
    db.session.add_all([admin, user, other, venue])
    db.session.commit()
    return admin, user, other, venue

def auth_header(app, user):
    token = jwt.encode({'user_id': user.id}, app.config['SECRET_KEY'], algorithm="HS256")
    return {'Authorization': f'Bearer {token}'}
