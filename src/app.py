"""
Flask web application for the bracket builder.
"""
import os
import random

from flask import Flask, request, jsonify

from bracket.display import get_bracket_display
from bracket.elimination import build_bracket
from bracket.errors import DrawError, DrawNotFoundError, DrawStoreError, RosterError
from bracket.seeding import automatic_draw, load_roster, manual_draw
from bracket.settings import load_settings
from bracket.storage import DrawStore

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.environ.get('BRACKET_DATA_DIR', os.path.join(BASE_DIR, 'data'))
SETTINGS_FILE = os.path.join(DATA_DIR, 'settings.yaml')


def get_store() -> DrawStore:
    return DrawStore(DATA_DIR)


def get_settings() -> dict:
    return load_settings(SETTINGS_FILE)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _draw_rng(random_seed):
    """Random generator for an automatic draw; a seed makes the shuffle reproducible."""
    if random_seed is None:
        return None
    if isinstance(random_seed, bool) or not isinstance(random_seed, (int, str)):
        raise DrawError('random_seed must be an integer or string')
    return random.Random(random_seed)


def _draw_summary(session: dict) -> dict:
    return {
        'id': session.get('id'),
        'title': session.get('title'),
        'draw_type': session.get('draw_type'),
        'drawn_at': session.get('drawn_at'),
        'is_final': session.get('is_final', False),
        'size': len(session.get('results', [])),
    }


@app.errorhandler(DrawStoreError)
def handle_store_error(e):
    app.logger.error(str(e))
    return jsonify({'error': 'Draw storage is unreadable; fix draws.yaml before making changes'}), 500


@app.route('/api/bracket', methods=['POST'])
def api_build_bracket():
    """Build a bracket from a posted roster without storing anything."""
    data = _json_body()
    try:
        roster = load_roster(data.get('competitors', []))
    except RosterError as e:
        return jsonify({'error': str(e)}), 400

    settings = get_settings()
    result = build_bracket(roster, settings)
    return jsonify(get_bracket_display(result, settings))


@app.route('/api/draws', methods=['GET'])
def api_list_draws():
    return jsonify({'draws': [_draw_summary(s) for s in get_store().list_draws()]})


@app.route('/api/draws', methods=['POST'])
def api_create_draw():
    """
    Run a seed draw and store it.

    Body: {title, type: 'automatic'|'manual', competitors: [...],
           assignments: {competitor_id: seed} (manual only),
           random_seed (automatic only, for a reproducible shuffle), notes}
    """
    data = _json_body()
    draw_type = data.get('type', 'automatic')
    try:
        competitors = load_roster(data.get('competitors', []))
        if draw_type == 'automatic':
            rng = _draw_rng(data.get('random_seed'))
            drawn = automatic_draw(competitors, rng)
        elif draw_type == 'manual':
            assignments = data.get('assignments') or {}
            if not isinstance(assignments, dict):
                raise DrawError('Manual draw assignments must map competitor ids to seed numbers')
            drawn = manual_draw(competitors, assignments)
        else:
            raise DrawError(f"Unknown draw type: {draw_type}")
        session = get_store().save_draw(data.get('title'), draw_type, drawn, notes=data.get('notes'))
    except (RosterError, DrawError) as e:
        return jsonify({'error': str(e)}), 400

    app.logger.info(f"Created {draw_type} draw {session['id']} ({len(drawn)} competitors)")
    return jsonify(session), 201


@app.route('/api/draws/<draw_id>', methods=['GET'])
def api_get_draw(draw_id):
    try:
        return jsonify(get_store().load_draw(draw_id))
    except DrawNotFoundError as e:
        return jsonify({'error': str(e)}), 404


@app.route('/api/draws/<draw_id>/finalize', methods=['POST'])
def api_finalize_draw(draw_id):
    try:
        return jsonify(get_store().finalize_draw(draw_id))
    except DrawNotFoundError as e:
        return jsonify({'error': str(e)}), 404


@app.route('/api/draws/<draw_id>', methods=['DELETE'])
def api_delete_draw(draw_id):
    try:
        get_store().delete_draw(draw_id)
    except DrawNotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except DrawError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'success': True})


@app.route('/api/draws/<draw_id>/bracket', methods=['GET'])
def api_draw_bracket(draw_id):
    """Bracket for a stored draw."""
    try:
        roster = get_store().roster_for_draw(draw_id)
    except DrawNotFoundError as e:
        return jsonify({'error': str(e)}), 404

    settings = get_settings()
    result = build_bracket(roster, settings)
    return jsonify(get_bracket_display(result, settings))


if __name__ == '__main__':
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1')
