from datetime import datetime, timezone

from flask import Blueprint, jsonify, current_app
from arcade.errors import ArcadeError

main = Blueprint('main', __name__)

# Error kind -> HTTP status. Storage failures are reported opaquely.
STATUS_BY_KIND = {
    'validation': 400,
    'conflict': 400,
    'authentication': 401,
    'storage': 500,
}


@main.app_errorhandler(ArcadeError)
def handle_arcade_error(error):
    status = STATUS_BY_KIND.get(error.kind, 500)
    if status >= 500:
        current_app.logger.error(f"[{error.kind}-error] {error.message}")
        return jsonify({'error': 'Internal server error'}), status
    current_app.logger.info(f"[{error.kind}-error] {error.message}")
    return jsonify({'error': error.message}), status


@main.route('/health')
def health():
    return jsonify({'status': 'OK', 'timestamp': datetime.now(timezone.utc).isoformat()})
