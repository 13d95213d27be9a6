from marshmallow import fields, validate

from casetrack.core.validation import BaseSchema


class RoleSchema(BaseSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    description = fields.Str(allow_none=True, validate=validate.Length(max=255))
