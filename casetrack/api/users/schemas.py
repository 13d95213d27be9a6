# casetrack/api/users/schemas.py
from marshmallow import fields, validate

from casetrack.core.constants import RecordStatus, values
from casetrack.core.validation import BaseSchema


class RegisterSchema(BaseSchema):
    username = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6, max=128))
    first_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    last_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=255))
    role_id = fields.Str(required=True)
    status = fields.Str(
        load_default=RecordStatus.ACTIVE.value, validate=validate.OneOf(values(RecordStatus))
    )


class LoginSchema(BaseSchema):
    email = fields.Email(required=True)
    password = fields.Str(required=True, load_only=True)


class UserUpdateSchema(BaseSchema):
    """Every field optional; password is re-hashed when present"""

    username = fields.Str(validate=validate.Length(min=1, max=100))
    password = fields.Str(load_only=True, validate=validate.Length(min=6, max=128))
    first_name = fields.Str(validate=validate.Length(min=1, max=100))
    last_name = fields.Str(validate=validate.Length(min=1, max=100))
    email = fields.Email(validate=validate.Length(max=255))
    role_id = fields.Str(allow_none=True)
    status = fields.Str(validate=validate.OneOf(values(RecordStatus)))
