# casetrack/core/validation.py
from flask import request
from marshmallow import Schema, ValidationError, EXCLUDE

from .errors import APIError


class BaseSchema(Schema):
    """Request schemas ignore unknown keys rather than failing on them"""

    class Meta:
        unknown = EXCLUDE


def load_or_400(schema: Schema, data=None, partial=False):
    """
    Validate a request body with ``schema``.

    Raises ``APIError`` 400 carrying marshmallow's per-field messages when
    the body is missing or invalid.
    """
    if data is None:
        data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise APIError("Request body must be a JSON object", status_code=400)

    try:
        return schema.load(data, partial=partial)
    except ValidationError as e:
        raise APIError("Validation failed", status_code=400, payload={"details": e.messages})
