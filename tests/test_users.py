"""
User endpoint tests - GET/DELETE /users/<id>, PUT /users, DELETE /users.
"""
import pytest

from placeholder_sync.models import User


class TestGetUser:

    def test_missing_user_returns_404(self, api):
        r = api.get('/users/42')

        assert r.status_code == 404
        assert r.get_json() == {'message': 'User not found'}

    def test_empty_id_returns_400(self, api):
        r = api.get('/users/')

        assert r.status_code == 400
        assert r.get_json() == {'message': 'User ID is required'}

    def test_non_numeric_id_returns_404(self, api):
        api.load()

        r = api.get('/users/abc')

        assert r.status_code == 404
        assert r.get_json() == {'message': 'User not found'}

    def test_response_has_no_internal_id(self, api):
        api.load()

        body = api.get('/users/1').get_json()

        assert '_id' not in body
        assert all('_id' not in p for p in body['posts'])


class TestPutUser:

    def test_create_user(self, api):
        """A new id returns 201, the user, and a Link header."""
        user = {'id': 11, 'name': 'New User', 'email': 'new@example.com'}

        r = api.put('/users', json=user)

        assert r.status_code == 201
        assert r.headers['Link'] == '/users/11'
        assert r.get_json() == user

    def test_created_user_is_readable(self, api):
        """GET after PUT returns the same record with no posts."""
        user = {'id': 12, 'name': 'Reader', 'address': {'city': 'Lisbon'}}
        api.put('/users', json=user)

        r = api.get('/users/12')

        assert r.status_code == 200
        assert r.get_json() == dict(user, posts=[])

    def test_existing_id_returns_409_without_insert(self, api):
        api.put('/users', json={'id': 13, 'name': 'First'})

        r = api.put('/users', json={'id': 13, 'name': 'Second'})

        assert r.status_code == 409
        assert r.get_json() == {'message': 'User already exists'}
        assert api.count('users') == 1
        assert api.get('/users/13').get_json()['name'] == 'First'

    def test_concurrent_insert_returns_409(self, api, monkeypatch):
        """If another request inserts the id after the existence check, the unique index still gives 409."""
        api.put('/users', json={'id': 15, 'name': 'First'})
        monkeypatch.setattr(User, 'by_id', classmethod(lambda cls, store, id: None))

        r = api.put('/users', json={'id': 15, 'name': 'Second'})

        assert r.status_code == 409
        assert r.get_json() == {'message': 'User already exists'}
        assert api.count('users') == 1

    def test_existing_loaded_id_returns_409(self, api):
        api.load()

        r = api.put('/users', json={'id': 1, 'name': 'Impostor'})

        assert r.status_code == 409

    def test_invalid_json_returns_400(self, api):
        r = api.put('/users', data='{"id": 1,')

        assert r.status_code == 400
        assert r.get_json() == {'message': 'Invalid JSON format'}
        assert api.count('users') == 0

    def test_empty_body_returns_400(self, api):
        r = api.put('/users', data='')

        assert r.status_code == 400
        assert r.get_json() == {'message': 'Invalid JSON format'}

    def test_non_object_body_returns_400(self, api):
        r = api.put('/users', json=[{'id': 1}])

        assert r.status_code == 400
        assert r.get_json() == {'message': 'Invalid JSON format'}

    @pytest.mark.parametrize('body', [{'name': 'No Id'}, {'id': 'seven'}, {'id': None}, {'id': True}])
    def test_missing_or_bad_id_returns_400(self, api, body):
        r = api.put('/users', json=body)

        assert r.status_code == 400
        assert r.get_json() == {'message': 'User ID is required'}
        assert api.count('users') == 0

    def test_posts_in_body_are_not_stored(self, api):
        r = api.put('/users', json={'id': 14, 'posts': [{'id': 1, 'title': 'x'}]})

        assert r.status_code == 201
        assert 'posts' not in r.get_json()
        assert api.get('/users/14').get_json()['posts'] == []


class TestDeleteUser:

    def test_delete_cascades_to_posts_and_comments(self, api, dataset):
        api.load()
        post_ids = [p['id'] for p in dataset.posts_for(2)]

        r = api.delete('/users/2')

        assert r.status_code == 204
        assert r.get_data() == b''
        assert api.get('/users/2').status_code == 404
        assert api.count('posts', {'userId': 2}) == 0
        assert api.count('comments', {'postId': {'$in': post_ids}}) == 0

    def test_delete_leaves_other_users_intact(self, api, dataset):
        api.load()

        api.delete('/users/2')

        assert api.get('/users/1').get_json() == dataset.joined_user(1)
        assert api.get('/users/3').get_json() == dataset.joined_user(3)
        assert api.count('users') == len(dataset.users) - 1

    def test_missing_user_returns_404_and_changes_nothing(self, api):
        api.load()
        before = api.counts()

        r = api.delete('/users/999')

        assert r.status_code == 404
        assert r.get_json() == {'message': 'User not found'}
        assert api.counts() == before

    def test_empty_id_returns_400(self, api):
        r = api.delete('/users/')

        assert r.status_code == 400
        assert r.get_json() == {'message': 'User ID is required'}


class TestDeleteAllUsers:

    def test_delete_all_empties_every_collection(self, api):
        api.load()
        api.put('/users', json={'id': 77})

        r = api.delete('/users')

        assert r.status_code == 204
        assert api.counts() == {'users': 0, 'posts': 0, 'comments': 0}

    def test_delete_all_on_empty_store(self, api):
        r = api.delete('/users')

        assert r.status_code == 204
        assert api.counts() == {'users': 0, 'posts': 0, 'comments': 0}
