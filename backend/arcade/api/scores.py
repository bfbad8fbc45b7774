from flask import Blueprint, jsonify, request
from arcade.services import get_services

scores = Blueprint('scores', __name__)


@scores.route('/game-score', methods=['POST'])
def save_game_score():
    data = request.get_json(silent=True) or {}
    get_services().ledger.record_score(
        data.get('userId'),
        data.get('gameType'),
        data.get('score'),
    )
    return jsonify({'message': 'Game score saved successfully'})


@scores.route('/stats/<string:user_id>', methods=['GET'])
def get_stats(user_id):
    snapshot = get_services().aggregator.get_stats(user_id)
    return jsonify({'stats': snapshot.to_dict()})


@scores.route('/game-scores', methods=['GET'])
def list_game_scores():
    """Every recorded score with its player's username (admin console)."""
    return jsonify({'scores': get_services().ledger.list_scores()})
