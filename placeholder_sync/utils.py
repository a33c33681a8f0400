from flask import jsonify

from .log import log


def err(message: str, code: int = 400, error: str = None):
    """Return error JSON and log it."""
    body = {'message': message}
    if error is not None:
        body['error'] = error
    log(f"{code} {message}" + (f": {error}" if error else ''), 'ERROR' if code >= 500 else 'WARN')
    return jsonify(body), code


def describe(e: Exception) -> str:
    """One-line detail for the `error` field of a 500 response."""
    message = getattr(e, 'message', None) or str(e) or type(e).__name__
    detail = getattr(e, 'error', None)
    return f"{message}: {detail}" if detail else message
