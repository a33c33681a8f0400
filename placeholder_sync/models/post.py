from ..model import Model, Store
from .comment import Comment


class Post(Model):
    """
    Post of a user. Fields as delivered upstream: id, userId, title, body.
    `comments` is only set on joined reads and never stored.
    """
    collection = 'posts'

    @classmethod
    def for_user(cls, store: Store, user_id: int) -> list['Post']:
        return cls.where(store, {'userId': user_id})

    def with_comments(self, store: Store) -> 'Post':
        self.comments = Comment.for_post(store, self.id)
        return self
