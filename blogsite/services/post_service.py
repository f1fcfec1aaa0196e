from flask import current_app

from blogsite.db import MAX_SQL_INTEGER
from blogsite.errors import Forbidden, NotFound, ValidationError
from blogsite.repositories import post_repository
from blogsite.schemas.post_schema import PostSchema
from blogsite.services import media_service


def _require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def _validate_fields(title, content):
    if not _require_non_empty_string(title) or not _require_non_empty_string(content):
        raise ValidationError("Title and content are required")
    return title.strip(), content.strip()


def parse_post_id(raw_post_id) -> int:
    if isinstance(raw_post_id, bool):
        raise ValidationError("Invalid Blog ID")
    if isinstance(raw_post_id, int):
        post_id = raw_post_id
    elif isinstance(raw_post_id, str) and raw_post_id.isascii() and raw_post_id.isdigit():
        post_id = int(raw_post_id)
    else:
        raise ValidationError("Invalid Blog ID")

    if post_id <= 0 or post_id > MAX_SQL_INTEGER:
        raise ValidationError("Invalid Blog ID")
    return post_id


def authorize_post_edit(raw_post_id, user_id: int):
    """Load a post for mutation by ``user_id``.

    The id is validated before any lookup, and ownership is only compared
    against a post that exists.
    """
    post_id = parse_post_id(raw_post_id)

    post = post_repository.get_by_id(post_id)
    if post is None:
        raise NotFound("Blog not found")

    if post.author_id != user_id:
        raise Forbidden("Unauthorized access")

    return post


def create_post(user_id: int, title, content, image=None):
    title, content = _validate_fields(title, content)

    image_reference = None
    if media_service.has_upload(image):
        image_reference = media_service.store_image(image, f"posts/{user_id}")

    return post_repository.create_post(
        author_id=user_id,
        title=title,
        content=content,
        image=image_reference,
    )


def edit_post(post, title, content, image=None):
    title, content = _validate_fields(title, content)

    image_reference = post.image
    if media_service.has_upload(image):
        image_reference = media_service.store_image(image, f"posts/{post.author_id}")

    return post_repository.update_post(
        post,
        title=title,
        content=content,
        image=image_reference,
    )


def serialize_post(post):
    return PostSchema().dump(post)


def get_posts(page: int, limit: int | None):
    max_limit = current_app.config["POSTS_MAX_PAGE_SIZE"]
    if limit is None or limit < 1:
        limit = current_app.config["POSTS_PAGE_SIZE"]
    if limit > max_limit:
        limit = max_limit
    if page is None or page < 1:
        page = 1
    # Past the last representable offset every page is empty anyway.
    page = min(page, MAX_SQL_INTEGER // limit + 1)

    posts = post_repository.list_newest_first((page - 1) * limit, limit)

    return {
        "page": page,
        "limit": limit,
        "total": post_repository.count(),
        "blogs": PostSchema(many=True).dump(posts),
    }
