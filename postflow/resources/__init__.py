from .users_resource import blp_users
from .posts_resource import blp_posts
from .tags_resource import blp_tags

__all__ = [
    "blp_users",
    "blp_posts",
    "blp_tags",
]
