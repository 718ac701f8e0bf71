from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from timeline import db

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Timeline game server!'})

@main.route('/health')
def health():
    try:
        db.session.execute(text('SELECT 1'))
        database = 'ok'
    except Exception as exc:
        db.session.rollback()
        current_app.logger.error(f"[health] database check failed: {exc}")
        database = 'unavailable'
    status = 200 if database == 'ok' else 503
    return jsonify({'status': 'ok' if status == 200 else 'degraded', 'database': database}), status
