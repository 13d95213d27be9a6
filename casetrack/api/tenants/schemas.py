from marshmallow import fields, validate

from casetrack.core.validation import BaseSchema
from casetrack.models.tenant import SUBDOMAIN_PATTERN


class TenantUpdateSchema(BaseSchema):
    name = fields.Str(validate=validate.Length(min=1, max=200))
    company_name = fields.Str(allow_none=True, validate=validate.Length(max=255))
    company_description = fields.Str(allow_none=True)
    domain = fields.Str(allow_none=True, validate=validate.Length(max=200))
    settings = fields.Dict()


class TenantCreateSchema(TenantUpdateSchema):
    subdomain = fields.Str(
        required=True,
        validate=[
            validate.Length(min=1, max=100),
            validate.Regexp(SUBDOMAIN_PATTERN, error="Subdomain may only contain a-z, 0-9 and '-'"),
        ],
    )
