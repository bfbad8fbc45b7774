from flask import Blueprint, jsonify, request
from arcade.services import get_services

accounts = Blueprint('accounts', __name__)


@accounts.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    user = get_services().identity.register(
        data.get('username'),
        data.get('email'),
        data.get('password'),
    )
    return jsonify({'message': 'User registered successfully', 'user': user})


@accounts.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = get_services().identity.login(data.get('email'), data.get('password'))
    return jsonify({'message': 'Login successful', 'user': user})


@accounts.route('/users', methods=['GET'])
def list_users():
    """All users, newest first (admin console)."""
    return jsonify({'users': get_services().identity.list_users()})
