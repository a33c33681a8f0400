from ..model import Model, Store
from .comment import Comment
from .post import Post


class User(Model):
    """
    A user with opaque profile fields (name, username, email, address, ...).
    `posts` is only set on joined reads and never stored.
    """
    collection = 'users'

    def with_posts(self, store: Store) -> 'User':
        """Attach the user's posts, each with its comments."""
        self.posts = [p.with_comments(store) for p in Post.for_user(store, self.id)]
        return self

    @classmethod
    def delete_cascade(cls, store: Store, user_id: int) -> bool:
        """
        Delete the user, its posts and their comments.
        Returns False (and touches nothing else) if the user does not exist.
        """
        if not cls.coll(store).delete_one({'id': user_id}):
            return False
        post_ids = [p.id for p in Post.for_user(store, user_id)]
        Comment.delete_for_posts(store, post_ids)
        Post.coll(store).delete_many({'userId': user_id})
        return True

    @staticmethod
    def delete_all(store: Store) -> None:
        for model in (User, Post, Comment):
            model.coll(store).delete_many({})
