from marshmallow import fields, validate

from casetrack.core.constants import ProcessStatus, values
from casetrack.core.validation import BaseSchema


class JudicialProcessSchema(BaseSchema):
    internal_lawyer_id = fields.Str(allow_none=True)
    external_lawyer_id = fields.Str(allow_none=True)
    province_id = fields.Str(allow_none=True)
    creditor_id = fields.Str(allow_none=True)
    product = fields.Str(allow_none=True)
    guarantee = fields.Str(allow_none=True)

    identification = fields.Str(required=True, validate=validate.Length(min=1, max=13))
    full_name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    operation = fields.Str(allow_none=True, validate=validate.Length(max=150))
    area_assignment_date = fields.Date(allow_none=True)
    internal_assignment_date = fields.Date(allow_none=True)
    external_assignment_date = fields.Date(allow_none=True)
    process_type = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    case_number = fields.Str(allow_none=True, validate=validate.Length(max=100))
    procedural_summary = fields.Str(allow_none=True)
    procedural_progress = fields.Str(allow_none=True)
    demand_date = fields.Date(allow_none=True)
    status = fields.Str(required=True, validate=validate.OneOf(values(ProcessStatus)))
