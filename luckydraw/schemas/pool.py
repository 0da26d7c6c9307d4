"""Schemas for the number pool API."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class PoolLoadSchema(Schema):
    """Validate a JSON pool replacement."""

    identifiers = fields.List(
        fields.String(validate=validate.Length(min=1, max=64)),
        required=True,
        validate=validate.Length(min=1),
    )

    # Sort ascending like a spreadsheet import; False keeps the given order.
    sort = fields.Boolean(required=False, load_default=True)


class TemplateQuerySchema(Schema):
    start = fields.Integer(required=False, load_default=1, validate=validate.Range(min=0))
    end = fields.Integer(required=False, load_default=180, validate=validate.Range(min=0))
    width = fields.Integer(required=False, load_default=3, validate=validate.Range(min=1, max=12))

    @validates_schema
    def _validate_range(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if int(data["start"]) > int(data["end"]):
            raise ValidationError({"start": ["start must be <= end"]})
        if int(data["end"]) - int(data["start"]) >= 100_000:
            raise ValidationError({"end": ["Range too large (max 100000 numbers)"]})


class PoolSchema(Schema):
    size = fields.Integer(required=True)
    drawn = fields.Integer(required=True)
    available_count = fields.Integer(required=True)
    available = fields.List(fields.String(), required=True)
