from flask import jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from ..utils import err, describe


def route_not_found():
    return jsonify({'message': 'Route not found'}), 404


def register(app):
    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def not_found(e):
        return route_not_found()

    @app.errorhandler(HTTPException)
    def http_error(e):
        return err(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def internal_error(e):
        return err('Internal server error', 500, describe(e))
