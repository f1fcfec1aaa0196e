from sqlalchemy.exc import SQLAlchemyError

from blogsite.db import db
from blogsite.errors import StorageError
from blogsite.models.post_model import Post


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StorageError("Could not save post") from e


def get_by_id(post_id: int):
    return db.session.get(Post, post_id)


def list_newest_first(offset: int, limit: int):
    return (
        Post.query
        .order_by(Post.created_at.desc(), Post.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def count() -> int:
    return Post.query.count()


def create_post(author_id, title, content, image=None):
    post = Post(
        author_id=author_id,
        title=title,
        content=content,
        image=image,
    )
    db.session.add(post)
    _commit()
    return post


# Owner is not a parameter: author_id is fixed at creation.
def update_post(post, title, content, image):
    post.title = title
    post.content = content
    post.image = image

    _commit()
    return post
