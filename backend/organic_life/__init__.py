from flask import Flask, current_app, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
import random
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def get_sessions():
    return current_app.extensions['organic_life.sessions']


def get_leaderboard():
    return current_app.extensions['organic_life.leaderboard']


def get_wall_clock():
    return current_app.extensions['organic_life.wall_clock']


def get_rng():
    return current_app.extensions['organic_life.rng']


def create_app(config_class=Config, clock=None, wall_clock=None, rng=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Per-app services: game sessions and the leaderboard
    from organic_life.services.game.sessions import SessionRegistry
    from organic_life.services.leaderboard import build_leaderboard
    from organic_life.services.game.timers import SystemClock
    flask_app.extensions['organic_life.sessions'] = SessionRegistry.from_config(flask_app.config, clock=clock)
    flask_app.extensions['organic_life.leaderboard'] = build_leaderboard(flask_app.config)
    flask_app.extensions['organic_life.wall_clock'] = wall_clock or SystemClock()
    flask_app.extensions['organic_life.rng'] = rng or random.Random()

    # Import and register blueprints here
    from organic_life.main import main
    flask_app.register_blueprint(main)

    from organic_life.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api/leaderboard')

    from organic_life.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    from organic_life.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Flask-Login user loader
    from organic_life.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from organic_life.services.leaderboard import SqlLeaderboardStore, demo_entries
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            if flask_app.config.get('LEADERBOARD_SEED', True):
                SqlLeaderboardStore().seed(demo_entries())
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
