from marshmallow import fields, validate

from casetrack.core.constants import ActivityStatus, ActivityType, Priority, values
from casetrack.core.validation import BaseSchema


class ActivitySchema(BaseSchema):
    judicial_process_id = fields.Str(required=True)
    title = fields.Str(allow_none=True, validate=validate.Length(max=200))
    description = fields.Str(allow_none=True)
    activity_type = fields.Str(required=True, validate=validate.OneOf(values(ActivityType)))
    activity_date = fields.DateTime(allow_none=True)
    due_date = fields.DateTime(allow_none=True)
    completed_date = fields.DateTime(allow_none=True)
    priority = fields.Str(validate=validate.OneOf(values(Priority)))
    status = fields.Str(validate=validate.OneOf(values(ActivityStatus)))
    assigned_to = fields.Str(allow_none=True)
    location = fields.Str(allow_none=True, validate=validate.Length(max=255))
    notes = fields.Str(allow_none=True)
