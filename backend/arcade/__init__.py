from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_migrate import Migrate
from sqlalchemy import event
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
migrate = Migrate()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', '*'))

    # Ensure models are registered on the metadata before anything creates tables
    from arcade import models  # noqa: F401
    from arcade.services import build_services

    with flask_app.app_context():
        engine = db.engine
        if engine.dialect.name == 'sqlite':
            event.listen(engine, 'connect', _enable_sqlite_foreign_keys)
        flask_app.extensions['arcade'] = build_services(
            engine, recent_limit=int(flask_app.config.get('RECENT_GAMES_LIMIT', 10))
        )

    # Import and register blueprints here
    from arcade.main import main
    flask_app.register_blueprint(main, url_prefix='/api')

    from arcade.api.accounts import accounts
    flask_app.register_blueprint(accounts, url_prefix='/api')

    from arcade.api.scores import scores
    flask_app.register_blueprint(scores, url_prefix='/api')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            identity = flask_app.extensions['arcade'].identity
            for name in ['testuser1', 'testuser2', 'testuser3']:
                identity.register(name, f'{name}@example.com', 'password')

            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    flask_app.logger.info(f"[startup] database={engine.dialect.name} recent_limit={flask_app.config.get('RECENT_GAMES_LIMIT', 10)}")
    return flask_app
