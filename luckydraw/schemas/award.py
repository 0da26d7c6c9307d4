"""Schemas for award configuration and progress."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class AwardConfigSchema(Schema):
    """One entry of the awards configuration mapping."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    quota = fields.Integer(required=True, validate=validate.Range(min=1))
    rounds = fields.List(
        fields.Integer(validate=validate.Range(min=1)),
        required=True,
        validate=validate.Length(min=1),
    )

    @validates_schema
    def _validate_rounds_sum(self, data, **kwargs):  # type: ignore[no-untyped-def]
        rounds = data.get("rounds") or []
        quota = int(data.get("quota") or 0)
        if sum(rounds) != quota:
            raise ValidationError({"rounds": [f"Rounds must sum to quota {quota} (got {sum(rounds)})"]})


class AwardCreateSchema(AwardConfigSchema):
    id = fields.String(
        required=True,
        validate=[validate.Length(min=1, max=64), validate.Regexp(r"^[A-Za-z0-9_\-]+$")],
    )


class AdHocAwardCreateSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    quota = fields.Integer(required=False, load_default=1, validate=validate.Range(min=1))

    @validates_schema
    def _validate_name(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if not str(data.get("name") or "").strip():
            raise ValidationError({"name": ["Name must not be blank"]})


class AwardsFileSchema(Schema):
    awards = fields.Dict(
        keys=fields.String(validate=validate.Length(min=1, max=64)),
        values=fields.Nested(AwardConfigSchema),
        required=True,
    )


class WinnerRecordSchema(Schema):
    identifier = fields.String(required=True)
    award_id = fields.String(required=True)
    award_name = fields.String(required=True)
    timestamp = fields.DateTime(required=True)


class AwardSchema(Schema):
    id = fields.String(required=True)
    name = fields.String(required=True)
    kind = fields.Function(lambda award: award.kind.value)
    quota = fields.Integer(required=True)
    rounds = fields.Function(lambda award: list(award.round_plan()))


class AwardProgressSchema(Schema):
    award_id = fields.String(required=True)
    name = fields.String(required=True)
    kind = fields.String(required=True)
    quota = fields.Integer(required=True)
    rounds = fields.List(fields.Integer())
    drawn_count = fields.Integer(required=True)
    completed = fields.Boolean(required=True)
    rolling = fields.Boolean(required=True)
    next_round_size = fields.Integer(required=True)
    current_round = fields.Integer(allow_none=True)
    winners = fields.List(fields.Nested(WinnerRecordSchema))
