from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from timeline.main import main
    flask_app.register_blueprint(main, url_prefix='/api')

    from timeline.api.cards import cards
    flask_app.register_blueprint(cards, url_prefix='/api')

    from timeline.api.placements import placements
    flask_app.register_blueprint(placements, url_prefix='/api/placements')

    from timeline.api.sessions import game_sessions
    flask_app.register_blueprint(game_sessions, url_prefix='/api/game-sessions')

    from timeline.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @flask_app.errorhandler(404)
    def not_found(_error):
        return jsonify({'error': 'Not found'}), 404

    @flask_app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({'error': 'Method not allowed'}), 405

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database with sample cards."""
        from timeline.seed import seed_cards
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            count = seed_cards()
            click.echo(f'Database has been reset and seeded with {count} cards!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
