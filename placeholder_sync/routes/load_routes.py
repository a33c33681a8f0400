from flask import jsonify

from .. import loader
from . import get_store, get_upstream, handles


def register(app):
    @app.route('/load', methods=['GET'])
    @handles('Failed to load data')
    def load_data():
        """Pull users, posts and comments from upstream into the store."""
        loader.load_all(get_store(), get_upstream())
        return jsonify({})
