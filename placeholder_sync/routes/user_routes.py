import json

from flask import jsonify, request

from ..errors import Conflict, NotFound, ValidationError
from ..models import User
from . import get_store, handles
from .error_routes import route_not_found


def _user_id(raw: str) -> int:
    if not raw:
        raise ValidationError('User ID is required')
    try:
        return int(raw)
    except ValueError:
        # Non-numeric ids can never match a stored user.
        raise NotFound('User not found')


def _new_user() -> User:
    try:
        data = json.loads(request.get_data(as_text=True))
    except ValueError:
        raise ValidationError('Invalid JSON format')
    if not isinstance(data, dict):
        raise ValidationError('Invalid JSON format')
    uid = data.get('id')
    if isinstance(uid, bool) or not isinstance(uid, int):
        raise ValidationError('User ID is required')
    data.pop('posts', None)
    return User(data)


def register(app):
    @app.route('/users', methods=['DELETE'])
    @handles('Failed to delete users')
    def delete_users():
        User.delete_all(get_store())
        return '', 204

    @app.route('/users', methods=['PUT'])
    @handles('Failed to put user')
    def put_user():
        user = _new_user()
        store = get_store()
        if User.by_id(store, user.id):
            raise Conflict('User already exists')
        try:
            user.insert(store)
        except Conflict:
            # unique index on id: a concurrent PUT with the same id got there first
            raise Conflict('User already exists')
        response = jsonify(user.to_dict())
        response.status_code = 201
        response.headers['Link'] = f'/users/{user.id}'
        return response

    # Without this werkzeug answers GET /users with a redirect to /users/.
    @app.route('/users', methods=['GET'])
    def list_users_not_supported():
        return route_not_found()

    @app.route('/users/', methods=['DELETE'], defaults={'user_id': ''})
    @app.route('/users/<user_id>', methods=['DELETE'])
    @handles('Failed to delete user')
    def delete_user(user_id):
        """Delete a user with its posts and their comments."""
        if not User.delete_cascade(get_store(), _user_id(user_id)):
            raise NotFound('User not found')
        return '', 204

    @app.route('/users/', methods=['GET'], defaults={'user_id': ''})
    @app.route('/users/<user_id>', methods=['GET'])
    @handles('Failed to get user')
    def get_user(user_id):
        """User with its posts, each post with its comments."""
        store = get_store()
        user = User.by_id(store, _user_id(user_id))
        if not user:
            raise NotFound('User not found')
        return jsonify(user.with_posts(store).to_dict())
