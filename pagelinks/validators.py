from __future__ import annotations

from typing import Any, Dict

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema


class PagingSettingsSchema(Schema):
    page_parameter         = fields.Str(required=True, validate=validate.Length(min=1, max=80))
    size_parameter         = fields.Str(required=True, validate=validate.Length(min=1, max=80))
    sort_parameter         = fields.Str(required=True, validate=validate.Length(min=1, max=80))
    one_indexed_parameters = fields.Bool(load_default=False)
    max_page_size          = fields.Int(required=True, validate=validate.Range(min=1))
    default_page_size      = fields.Int(required=True, validate=validate.Range(min=1))
    prefix                 = fields.Str(load_default="")
    qualifier_delimiter    = fields.Str(load_default="_")

    @validates_schema
    def check_names(self, data: Dict[str, Any], **kwargs):
        names = [data.get("page_parameter"), data.get("size_parameter"), data.get("sort_parameter")]
        if len(set(names)) != len(names):
            raise ValidationError("page, size and sort parameters must be distinct", "page_parameter")


class LinkSchema(Schema):
    href      = fields.Str(required=True)
    templated = fields.Bool(load_default=False)


class PageMetadataSchema(Schema):
    size           = fields.Int(required=True, validate=validate.Range(min=1))
    number         = fields.Int(required=True, validate=validate.Range(min=0))
    total_elements = fields.Int(required=True, validate=validate.Range(min=0))
    total_pages    = fields.Int(required=True, validate=validate.Range(min=0))


class PageQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    total = fields.Int(load_default=0, validate=validate.Range(min=0))


class PageableSchema(Schema):
    page = fields.Int(required=True)
    size = fields.Int(required=True)
    sort = fields.List(fields.Str(), load_default=list)
