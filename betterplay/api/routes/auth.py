from flask import Blueprint, request, jsonify, current_app
from betterplay.errors import ValidationError, AuthError
from betterplay.models import User
from betterplay.extensions import db
from werkzeug.security import generate_password_hash, check_password_hash
import jwt
from datetime import datetime, timedelta

auth_bp = Blueprint('auth', __name__)

def issue_token(user):
    return jwt.encode({
        'user_id': user.id,
        'exp': datetime.utcnow() + timedelta(hours=current_app.config['TOKEN_TTL_HOURS'])
    }, current_app.config['SECRET_KEY'], algorithm="HS256")

@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    for field in ('username', 'email', 'password'):
        if not data.get(field):
            raise ValidationError(f"{field} is required")

    if User.query.filter_by(username=data['username']).first():
        raise ValidationError('Username already exists')
    if User.query.filter_by(email=data['email']).first():
        raise ValidationError('Email already exists')

    user = User(
        name=data.get('name'),
        username=data['username'],
        email=data['email'],
        password_hash=generate_password_hash(data['password'])
    )
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"Registered user {user.id} ({user.username})")

    return jsonify({'token': issue_token(user), 'user': user.to_dict()}), 201

@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = User.query.filter_by(username=data.get('username')).first()

    if not user or not user.password_hash or not check_password_hash(user.password_hash, data.get('password') or ''):
        raise AuthError('Invalid credentials')

    return jsonify({'token': issue_token(user), 'username': user.username, 'role': user.role})
