"""Schemas for round begin/commit responses."""

from __future__ import annotations

from marshmallow import Schema, fields


class RoundOpenedSchema(Schema):
    award_id = fields.String(required=True)
    round_size = fields.Integer(required=True)
    drawn_count = fields.Integer(required=True)
    quota = fields.Integer(required=True)


class RoundResultSchema(Schema):
    award_id = fields.String(required=True)
    winners = fields.List(fields.String(), required=True)
    round_size = fields.Integer(required=True)
    drawn_count = fields.Integer(required=True)
    quota = fields.Integer(required=True)
    completed = fields.Boolean(required=True)
