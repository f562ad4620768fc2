import pytest

import spotify_api
from app import create_app
from config import API_BASE_URL, SpotifyConfig


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body=None):
        self.status_code = status_code
        self._payload = payload
        if body is None:
            body = '' if payload is None else 'json'
        self.text = body
        self.content = body.encode()

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON object could be decoded')
        return self._payload


class FakeUpstream:
    """Stands in for requests.get/post and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.token_response = FakeResponse(200, {'access_token': 'access-123', 'refresh_token': 'refresh-456'})

    def add(self, path, status_code=200, payload=None, body=None):
        self.routes[path] = FakeResponse(status_code, payload, body)

    def fail(self, path, exc):
        self.routes[path] = exc

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append(('GET', url, headers, params))
        path = url[len(API_BASE_URL):]
        response = self.routes.get(path)
        if response is None:
            return FakeResponse(404, {'error': {'status': 404}})
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, data=None, timeout=None):
        self.calls.append(('POST', url, None, data))
        if isinstance(self.token_response, Exception):
            raise self.token_response
        return self.token_response

    def paths(self):
        return [url for _, url, _, _ in self.calls]


@pytest.fixture
def spotify_config():
    return SpotifyConfig(
        client_id='test-client',
        client_secret='test-secret',
        redirect_uri='http://localhost/callback',
        secret_key='test-secret-key',
    )


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(spotify_api.requests, 'get', fake.get)
    monkeypatch.setattr(spotify_api.requests, 'post', fake.post)
    return fake


@pytest.fixture
def client(spotify_config, upstream):
    app = create_app(spotify_config)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def signed_in(client):
    with client.session_transaction() as sess:
        sess['accessToken'] = 'access-123'
        sess['refreshToken'] = 'refresh-456'
    return client


def make_artist(name, genres, image_count=3):
    return {
        'id': name.lower().replace(' ', '-'),
        'name': name,
        'genres': genres,
        'images': [{'url': f'https://img.example/{name}/{i}.jpg'} for i in range(image_count)],
        'followers': {'total': 100},
        'popularity': 50,
    }
