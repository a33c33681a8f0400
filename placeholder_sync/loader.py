"""
Pulls users, their posts and the posts' comments from upstream and stores them.
Strictly sequential. Rows are upserted by id, so a reload refreshes instead of
duplicating. A failure aborts the run; rows stored so far stay.
"""
from .log import log
from .model import Store
from .models import User, Post, Comment
from .upstream import PlaceholderClient


def load_all(store: Store, client: PlaceholderClient) -> dict:
    """
    Returns: {'users': int, 'posts': int, 'comments': int}
    """
    result = {'users': 0, 'posts': 0, 'comments': 0}
    users = [User(u) for u in client.users()]
    log(f"Loading {len(users)} users")

    for user in users:
        posts = [Post(p) for p in client.posts_for_user(user.id)]
        for post in posts:
            comments = [Comment(c) for c in client.comments_for_post(post.id)]
            post.comments = comments
            Comment.upsert_many(store, comments)
            result['comments'] += len(comments)
        user.posts = posts
        Post.upsert_many(store, posts)
        result['posts'] += len(posts)
        user.upsert(store)
        result['users'] += 1

    log(f"Loaded {result['users']} users, {result['posts']} posts, {result['comments']} comments")
    return result
