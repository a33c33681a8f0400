from flask import Flask, request
from flask_cors import CORS

from . import log as logger
from .config import Config, load_config
from .errors import ConfigError, StoreError
from .log import log
from .model import Store
from .routes import error_routes, load_routes, user_routes
from .routes.error_routes import route_not_found
from .upstream import PlaceholderClient
from .utils import describe


def create_app(config: Config, store: Store, upstream: PlaceholderClient = None) -> Flask:
    """
    Build the Flask app around an already constructed store.

        GET    /load          → pull upstream data into the store
        DELETE /users         → wipe users, posts, comments
        PUT    /users         → create one user
        GET    /users/<id>    → user with posts and comments
        DELETE /users/<id>    → delete user, its posts and their comments
    """
    app = Flask(__name__)
    CORS(app, origins=config.cors_origins)

    app.extensions['store'] = store
    app.extensions['upstream'] = upstream or PlaceholderClient(config.placeholder_url)

    @app.before_request
    def log_request():
        log(f"{request.method} {request.path}")

    @app.before_request
    def implicit_methods():
        # Flask adds HEAD to GET rules and answers OPTIONS itself; only CORS preflights get through.
        if request.method == 'HEAD':
            return route_not_found()
        if request.method == 'OPTIONS' and 'Access-Control-Request-Method' not in request.headers:
            return route_not_found()

    @app.after_request
    def json_content_type(response):
        response.headers['Content-Type'] = 'application/json'
        return response

    load_routes.register(app)
    user_routes.register(app)
    error_routes.register(app)
    return app


def main(environ=None) -> int:
    """Validate config, connect to MongoDB, then serve. Never listens without a database."""
    try:
        config = load_config(environ)
    except ConfigError as e:
        log(f"Invalid configuration: {e}", 'ERROR')
        return 1
    logger.configure(config.log_file)

    store = Store(config.mongo_uri, config.db_name)
    try:
        store.connect()
    except StoreError as e:
        log(f"Failed to start server due to MongoDB connection error: {describe(e)}", 'ERROR')
        return 1
    log('Connected successfully to MongoDB')

    app = create_app(config, store)
    log(f"Server is running on port {config.port}")
    try:
        app.run(host=config.host, port=config.port)
    finally:
        store.close()
    return 0
