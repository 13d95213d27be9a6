from marshmallow import fields, validate

from casetrack.core.constants import RecordStatus, values
from casetrack.core.validation import BaseSchema


class CreditorSchema(BaseSchema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    # Ecuadorian taxpayer number
    ruc = fields.Str(required=True, validate=validate.Length(min=1, max=20))
    status = fields.Str(required=True, validate=validate.OneOf(values(RecordStatus)))
