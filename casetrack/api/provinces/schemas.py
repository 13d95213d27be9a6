from marshmallow import fields, validate

from casetrack.core.validation import BaseSchema


class ProvinceSchema(BaseSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    postal_code = fields.Str(allow_none=True, validate=validate.Length(max=20))
