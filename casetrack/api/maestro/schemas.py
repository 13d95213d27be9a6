from marshmallow import fields, validate

from casetrack.core.constants import MaestroStatus, values
from casetrack.core.validation import BaseSchema


class MaestroSchema(BaseSchema):
    value = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    code_maestro = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    status = fields.Str(validate=validate.OneOf(values(MaestroStatus)))
