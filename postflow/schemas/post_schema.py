from marshmallow import Schema, fields, validate, EXCLUDE, ValidationError

from ..constants.service_code import ERROR_MESSAGES

# at least one non-whitespace character
NOT_BLANK = validate.Regexp(r"^\s*\S", error="Must not be blank.")

# BSON integers are signed 64-bit
BSON_INT_MIN = -(2 ** 63)
BSON_INT_MAX = 2 ** 63 - 1


def storable(value):
    """Reject integers MongoDB cannot store, at any nesting depth."""
    if isinstance(value, bool):
        return
    if isinstance(value, int):
        if not BSON_INT_MIN <= value <= BSON_INT_MAX:
            raise ValidationError(ERROR_MESSAGES["INT_TOO_LARGE"])
    elif isinstance(value, dict):
        for item in value.values():
            storable(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            storable(item)


class PostContentSchema(Schema):
    """Free-form content fields shared by create and update."""
    class Meta:
        unknown = EXCLUDE

    caption = fields.Str(allow_none=True)
    cta = fields.Str(allow_none=True)
    source = fields.Str(allow_none=True)
    driveLink = fields.Str(allow_none=True)
    # list of strings or a single space-separated string
    hashtags = fields.Raw(allow_none=True, validate=storable)


class CreatePostSchema(PostContentSchema):
    account = fields.Str(required=True, validate=NOT_BLANK)
    day = fields.Str(required=True, validate=NOT_BLANK)


class UpdatePostSchema(PostContentSchema):
    account = fields.Str(validate=NOT_BLANK)
    day = fields.Str(validate=NOT_BLANK)


class PostStatusSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    status = fields.Str(
        required=True,
        validate=validate.OneOf(["posted", "pending"], error=ERROR_MESSAGES["INVALID_STATUS"]),
        error_messages={"required": ERROR_MESSAGES["INVALID_STATUS"], "null": ERROR_MESSAGES["INVALID_STATUS"]},
    )


class ListPostsQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    account = fields.Str(required=False)
    page = fields.Int(required=False, load_default=1, validate=validate.Range(min=1))
