from functools import wraps
from flask import request, current_app
import jwt
from betterplay.errors import AuthError, ForbiddenError
from betterplay.extensions import db
from betterplay.models.user import User

def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = None
        if 'Authorization' in request.headers:
            # Bearer <token>
            auth_header = request.headers['Authorization']
            if auth_header.startswith("Bearer "):
                token = auth_header.split(" ")[1]

        if not token:
            raise AuthError('Token is missing!')

        try:
            data = jwt.decode(token, current_app.config['SECRET_KEY'], algorithms=["HS256"])
        except jwt.InvalidTokenError:
            raise AuthError('Token is invalid!')

        current_user = db.session.get(User, data.get('user_id'))
        if not current_user:
            raise AuthError('Token is invalid!')

        return f(current_user, *args, **kwargs)

    return decorated

def admin_required(f):
    # Stack under @token_required, which passes current_user as the first arg
    @wraps(f)
    def decorated(*args, **kwargs):
        current_user = args[0]
        if not current_user.is_admin:
            raise ForbiddenError('Admin privilege required')
        return f(*args, **kwargs)
    return decorated
