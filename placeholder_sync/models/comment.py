from ..model import Model, Store


class Comment(Model):
    """Comment on a post. Fields as delivered upstream: id, postId, name, email, body."""
    collection = 'comments'

    @classmethod
    def for_post(cls, store: Store, post_id: int) -> list['Comment']:
        return cls.where(store, {'postId': post_id})

    @classmethod
    def delete_for_posts(cls, store: Store, post_ids: list[int]) -> int:
        if not post_ids:
            return 0
        return cls.coll(store).delete_many({'postId': {'$in': post_ids}})
