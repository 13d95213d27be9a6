from marshmallow import fields, validate

from casetrack.core.constants import LawyerType, RecordStatus, values
from casetrack.core.validation import BaseSchema


class LawyerSchema(BaseSchema):
    first_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    last_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=150))
    phone = fields.Str(allow_none=True, validate=validate.Length(max=30))
    lawyer_type = fields.Str(required=True, validate=validate.OneOf(values(LawyerType)))
    status = fields.Str(required=True, validate=validate.OneOf(values(RecordStatus)))
    user_id = fields.Str(allow_none=True)
