from marshmallow import fields, validate

from casetrack.core.validation import BaseSchema


class EventSchema(BaseSchema):
    user_id = fields.Str(required=True)
    event_date = fields.DateTime(required=True)
    description = fields.Str(required=True, validate=validate.Length(min=1))
    location = fields.Str(allow_none=True, validate=validate.Length(max=255))
