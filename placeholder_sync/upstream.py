"""
Client for the upstream JSON API (JSONPlaceholder layout):

    GET /users
    GET /posts?userId=<id>
    GET /comments?postId=<id>
"""
import requests

from .errors import FetchError


class PlaceholderClient:

    def __init__(self, base_url: str, session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        # None: every call goes through requests.get
        self.session = session

    def get_json(self, endpoint: str):
        """GET base_url + endpoint and return the parsed body. Raises FetchError."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = (self.session or requests).get(url)
        except requests.exceptions.RequestException as e:
            raise FetchError(f'GET {endpoint} failed', str(e)) from e
        if response.status_code >= 400:
            raise FetchError(f'GET {endpoint} failed', f'Upstream returned {response.status_code}')
        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f'GET {endpoint} returned invalid JSON', str(e)) from e

    def users(self) -> list[dict]:
        return self.get_json('/users')

    def posts_for_user(self, user_id: int) -> list[dict]:
        return self.get_json(f'/posts?userId={user_id}')

    def comments_for_post(self, post_id: int) -> list[dict]:
        return self.get_json(f'/comments?postId={post_id}')
