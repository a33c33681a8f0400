"""
placeholder-sync - copies JSONPlaceholder users, posts and comments into
MongoDB and serves the stored copy over HTTP.
"""

from .app import create_app, main
from .config import Config, load_config
from .model import Store

__version__ = '0.1.0'

__all__ = ['create_app', 'main', 'Config', 'load_config', 'Store']
