"""Request body parsing shared by the blueprints."""
from __future__ import annotations

from flask import request

from ..errors import ValidationError


def json_body() -> dict:
    """Return the JSON body as a dict.

    A missing or unparsable body counts as empty, so the field checks
    that follow report what is missing. Any other JSON value (an array,
    a string, a number) is rejected with a 400.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
