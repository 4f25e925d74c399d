from marshmallow import Schema, fields, INCLUDE, validates_schema

from .post_schema import NOT_BLANK, storable


class CreateTagSchema(Schema):
    """account is required; any other caller-supplied keys are stored as sent."""
    class Meta:
        unknown = INCLUDE

    account = fields.Str(required=True, validate=NOT_BLANK)

    @validates_schema
    def check_storable(self, data, **kwargs):
        storable(data)
