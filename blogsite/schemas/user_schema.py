from blogsite.extensions.extensions import ma
from blogsite.services.media_service import build_media_url


class ProfileSchema(ma.Schema):
    """Public view of a user. The password hash is never dumped."""

    id = ma.Int()
    full_name = ma.Str()
    email = ma.Str()
    username = ma.Str()
    profile_image = ma.Function(lambda user: build_media_url(user.profile_image))
