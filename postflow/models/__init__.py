from .post_model import Post
from .tag_model import Tag
from .user_model import User


def ensure_indexes():
    """Create the collection indexes the models rely on. Safe to re-run."""
    User.ensure_indexes()
    Post.ensure_indexes()
    Tag.ensure_indexes()


__all__ = ["Post", "Tag", "User", "ensure_indexes"]
