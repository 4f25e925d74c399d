from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from ..constants.roles import ALLOWED_ROLES
from ..constants.service_code import ERROR_MESSAGES


class AccessRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    role = fields.Str(
        required=True,
        validate=validate.OneOf(ALLOWED_ROLES, error=ERROR_MESSAGES["INVALID_ROLE"]),
        error_messages={
            "required": ERROR_MESSAGES["INVALID_ROLE"],
            "null": ERROR_MESSAGES["INVALID_ROLE"],
            "invalid": ERROR_MESSAGES["INVALID_ROLE"],
        },
    )

    @pre_load
    def lower_role(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("role"), str):
            data = dict(data)
            data["role"] = data["role"].strip().lower()
        return data

