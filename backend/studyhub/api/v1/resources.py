"""Resource, rating and comment endpoints. All require an access token."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from studyhub.api.deps import (
    json_response,
    parse_id,
    request_payload,
    require_auth,
    service_context,
    timing,
)
from studyhub.schemas import (
    CommentInSchema,
    CommentSchema,
    RateSchema,
    RatingStatsSchema,
    ResourceCreateSchema,
    ResourceQuerySchema,
    ResourceSchema,
    ResourceUpdateSchema,
    build_meta,
)
from studyhub.services.comments import CommentService
from studyhub.services.ratings import RatingService
from studyhub.services.resources import (
    ResourceCommandService,
    ResourceDiscoveryService,
    ResourceQueryBuilder,
)
from studyhub.services.resources.dto import ResourceCreateIn, ResourceQueryIn, ResourceUpdateIn

bp = Blueprint("resources", __name__)

create_schema = ResourceCreateSchema()
update_schema = ResourceUpdateSchema()
query_schema = ResourceQuerySchema()
resource_schema = ResourceSchema()
resource_list_schema = ResourceSchema(many=True)
rate_schema = RateSchema()
stats_schema = RatingStatsSchema()
comment_in_schema = CommentInSchema()
comment_schema = CommentSchema()
comment_list_schema = CommentSchema(many=True)


def _query_builder() -> ResourceQueryBuilder:
    cfg = current_app.config
    return ResourceQueryBuilder(
        default_limit=int(cfg.get("DEFAULT_PAGE_LIMIT", 10)),
        max_limit=int(cfg.get("MAX_PAGE_LIMIT", 100)),
    )


# ------------------------------- Resources -----------------------------------


@bp.post("/resource")
@require_auth
@timing
def create_resource():
    data = create_schema.load(request_payload())
    out = ResourceCommandService(ctx=service_context()).create(ResourceCreateIn(**data))
    return json_response(resource_schema.dump(out), "Resource uploaded successfully", status=201)


@bp.get("/resources")
@require_auth
@timing
def list_resources():
    """Filtered, searched and paginated discovery of visible resources."""

    raw = query_schema.load(request.args)
    flt = _query_builder().build(ResourceQueryIn(**raw))
    result = ResourceDiscoveryService().list(flt)
    body = {"items": resource_list_schema.dump(result.items), **build_meta(result.meta)}
    return json_response(body, "Resources fetched successfully")


@bp.get("/resource/<resource_id>")
@require_auth
@timing
def get_resource(resource_id: str):
    out = ResourceDiscoveryService().get(parse_id(resource_id))
    return json_response(resource_schema.dump(out), "Resource fetched successfully")


@bp.put("/resource/<resource_id>")
@require_auth
@timing
def update_resource(resource_id: str):
    data = update_schema.load(request.get_json(silent=True) or {})
    dto = ResourceUpdateIn(resource_id=parse_id(resource_id), **data)
    out = ResourceCommandService(ctx=service_context()).update(dto)
    return json_response(resource_schema.dump(out), "Resource updated successfully")


@bp.delete("/resource/<resource_id>")
@require_auth
@timing
def delete_resource(resource_id: str):
    ResourceCommandService(ctx=service_context()).delete(parse_id(resource_id))
    return json_response({}, "Resource deleted successfully")


# ------------------------------- Ratings -------------------------------------


@bp.post("/resource/<resource_id>/rate")
@require_auth
@timing
def rate_resource(resource_id: str):
    data = rate_schema.load(request.get_json(silent=True) or {})
    stats = RatingService(ctx=service_context()).rate(parse_id(resource_id), data["rating"])
    return json_response(stats_schema.dump(stats), "Resource rated successfully")


@bp.delete("/resource/<resource_id>/rate")
@require_auth
@timing
def remove_rating(resource_id: str):
    stats = RatingService(ctx=service_context()).remove(parse_id(resource_id))
    return json_response(stats_schema.dump(stats), "Rating removed successfully")


@bp.get("/resource/<resource_id>/rating")
@require_auth
@timing
def get_rating(resource_id: str):
    stats = RatingService().mean_rating(parse_id(resource_id))
    return json_response(stats_schema.dump(stats), "Average rating fetched successfully")


# ------------------------------- Comments ------------------------------------


@bp.post("/resource/<resource_id>/comment")
@require_auth
@timing
def add_comment(resource_id: str):
    data = comment_in_schema.load(request.get_json(silent=True) or {})
    out = CommentService(ctx=service_context()).add(parse_id(resource_id), data["comment"])
    return json_response(comment_schema.dump(out), "Comment added successfully", status=201)


@bp.get("/resource/<resource_id>/comments")
@require_auth
@timing
def list_comments(resource_id: str):
    items = CommentService().list(parse_id(resource_id))
    return json_response(comment_list_schema.dump(items), "Comments fetched successfully")


@bp.put("/resource/<resource_id>/comment/<comment_id>")
@require_auth
@timing
def edit_comment(resource_id: str, comment_id: str):
    data = comment_in_schema.load(request.get_json(silent=True) or {})
    out = CommentService(ctx=service_context()).edit(
        parse_id(resource_id), parse_id(comment_id, label="comment"), data["comment"]
    )
    return json_response(comment_schema.dump(out), "Comment updated successfully")


@bp.delete("/resource/<resource_id>/comment/<comment_id>")
@require_auth
@timing
def delete_comment(resource_id: str, comment_id: str):
    CommentService(ctx=service_context()).delete(
        parse_id(resource_id), parse_id(comment_id, label="comment")
    )
    return json_response({}, "Comment deleted successfully")
