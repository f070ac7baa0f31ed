"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields

from studyhub.services._shared.dto import PageMeta


class MetaSchema(Schema):
    """Pagination block merged into list payloads."""

    total_items = fields.Integer(required=True, data_key="totalItems")
    total_pages = fields.Integer(required=True, data_key="totalPages")
    current_page = fields.Integer(required=True, data_key="currentPage")
    limit = fields.Integer(required=True)


_meta_schema = MetaSchema()


def build_meta(meta: PageMeta) -> dict[str, Any]:
    """Return the ``{totalItems, totalPages, currentPage, limit}`` mapping."""

    return _meta_schema.dump(meta)
