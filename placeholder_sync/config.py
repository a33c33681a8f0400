import os
from dataclasses import dataclass, field

from .errors import ConfigError

DEFAULT_DB_NAME = 'swift_assignment'
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 8080


@dataclass
class Config:
    mongo_uri: str
    placeholder_url: str
    db_name: str = DEFAULT_DB_NAME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_file: str = ''
    cors_origins: list[str] = field(default_factory=lambda: ['*'])


def load_config(environ=None) -> Config:
    """
    Reads the process environment into a Config.
    Raises ConfigError naming every missing or malformed variable.
    """
    env = os.environ if environ is None else environ
    problems = []

    mongo_uri = env.get('MONGO_URI', '').strip()
    if not mongo_uri:
        problems.append('MONGO_URI is required')

    placeholder_url = env.get('JSON_PLACEHOLDER_URL', '').strip().rstrip('/')
    if not placeholder_url:
        problems.append('JSON_PLACEHOLDER_URL is required')

    port = DEFAULT_PORT
    raw_port = env.get('PORT', '').strip()
    if raw_port:
        try:
            port = int(raw_port)
        except ValueError:
            port = None
        if port is None or not 0 < port < 65536:
            problems.append(f'PORT must be an integer between 1 and 65535, got {raw_port!r}')

    if problems:
        raise ConfigError('; '.join(problems))

    origins = [o.strip() for o in env.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    return Config(
        mongo_uri=mongo_uri,
        placeholder_url=placeholder_url,
        db_name=env.get('DB_NAME', '').strip() or DEFAULT_DB_NAME,
        host=env.get('HOST', '').strip() or DEFAULT_HOST,
        port=port,
        log_file=env.get('LOG_FILE', '').strip(),
        cors_origins=origins or ['*'],
    )
