from marshmallow import fields, validate

from casetrack.core.constants import DocumentStatus, values
from casetrack.core.validation import BaseSchema


class DocumentUploadSchema(BaseSchema):
    judicial_process_id = fields.Str(required=True)
    file_name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    file_type = fields.Str(load_default="application/octet-stream", validate=validate.Length(max=255))
    # base64, optionally as a data URL
    file_data = fields.Str(required=True, validate=validate.Length(min=1))
    description = fields.Str(allow_none=True)


class DocumentUpdateSchema(BaseSchema):
    description = fields.Str(allow_none=True)
    status = fields.Str(validate=validate.OneOf(values(DocumentStatus)))
