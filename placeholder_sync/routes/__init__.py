from functools import wraps

from flask import current_app

from ..errors import AppError
from ..utils import err, describe


def get_store():
    return current_app.extensions['store']


def get_upstream():
    return current_app.extensions['upstream']


def handles(failure: str):
    """
    Converts anything a handler raises into a JSON error response:
    4xx AppErrors keep their message, everything else is a 500 `failure`.
    """
    def wrap(fn):
        @wraps(fn)
        def inner(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except AppError as e:
                if e.status < 500:
                    return err(e.message, e.status)
                return err(failure, 500, describe(e))
            except Exception as e:
                return err(failure, 500, describe(e))
        return inner
    return wrap
