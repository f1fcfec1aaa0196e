from blogsite.extensions.extensions import ma
from blogsite.services.media_service import build_media_url


class AuthorSchema(ma.Schema):
    id = ma.Int()
    username = ma.Str()


class PostSchema(ma.Schema):
    id = ma.Int()
    title = ma.Str()
    content = ma.Str()
    image = ma.Function(lambda post: build_media_url(post.image))
    author = ma.Nested(AuthorSchema)
    created_at = ma.DateTime()
