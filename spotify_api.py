import enum
import logging
from dataclasses import dataclass

import requests

from genres import rank_genres

log = logging.getLogger(__name__)

TIME_RANGES = ('short_term', 'medium_term', 'long_term')
DEFAULT_TIME_RANGE = 'short_term'
DEFAULT_PROFILE_IMAGE = '/static/default-profile-pic.svg'


class Outcome(enum.Enum):
    OK = 'ok'
    EMPTY = 'empty'
    INVALID_TOKEN = 'invalid_token'
    UPSTREAM_ERROR = 'upstream_error'


@dataclass(frozen=True)
class Result:
    outcome: Outcome
    value: object = None

    @property
    def failed(self):
        return self.outcome in (Outcome.INVALID_TOKEN, Outcome.UPSTREAM_ERROR)


@dataclass(frozen=True)
class UserProfile:
    display_name: str
    email: str
    image_url: str

    @classmethod
    def from_payload(cls, data):
        images = data.get('images') or []
        first = images[0] if isinstance(images, list) and images else None
        image_url = first.get('url') if isinstance(first, dict) else None
        return cls(
            display_name=data.get('display_name') or 'Unknown User',
            email=data.get('email') or 'No email available',
            image_url=image_url or DEFAULT_PROFILE_IMAGE,
        )


def _items_result(data):
    items = data.get('items') or []
    if not isinstance(items, list):
        log.error("Unexpected items payload: %r", type(items))
        return Result(Outcome.UPSTREAM_ERROR)
    return Result(Outcome.OK if items else Outcome.EMPTY, items)


class SpotifyClient:
    """Spotify accounts + Web API calls for a single signed-in user."""

    def __init__(self, config):
        self.config = config

    # --- OAuth handshake ---

    def authorize_url(self):
        params = {
            'client_id': self.config.client_id,
            'response_type': 'code',
            'redirect_uri': self.config.redirect_uri,
            'scope': ' '.join(self.config.scopes),
            'show_dialog': 'true',
        }
        return requests.Request('GET', f'{self.config.auth_base_url}/authorize', params=params).prepare().url

    def exchange_code(self, code):
        """
        Trade an authorization code for tokens.

        Returns a dict with access_token and refresh_token, or None if the
        exchange failed for any reason.
        """
        try:
            res = requests.post(f'{self.config.auth_base_url}/api/token', data={
                'grant_type': 'authorization_code',
                'code': code,
                'redirect_uri': self.config.redirect_uri,
                'client_id': self.config.client_id,
                'client_secret': self.config.client_secret,
            }, timeout=self.config.timeout)
        except requests.RequestException as e:
            log.error("Error getting access token: %s", e)
            return None

        if not res.ok:
            log.error("Error getting access token: HTTP %s %s", res.status_code, res.text)
            return None

        try:
            res_body = res.json()
        except ValueError as e:
            log.error("Error decoding token response: %s", e)
            return None

        if not isinstance(res_body, dict):
            log.error("Unexpected token response: %r", type(res_body))
            return None

        if not res_body.get('access_token'):
            log.error("Token response had no access_token: %s", res_body.get('error'))
            return None

        return {
            'access_token': res_body['access_token'],
            'refresh_token': res_body.get('refresh_token'),
        }

    # --- Web API ---

    def _get(self, token, path, params=None):
        """
        GET an API path and hand back (outcome, payload).

        A 401 is reported as INVALID_TOKEN so callers can force a logout; every
        other failure collapses to UPSTREAM_ERROR.
        """
        headers = {
            'Authorization': f'Bearer {token}'
        }
        try:
            response = requests.get(f'{self.config.api_base_url}{path}', headers=headers,
                                    params=params, timeout=self.config.timeout)
        except requests.RequestException as e:
            log.error("Error fetching %s: %s", path, e)
            return Outcome.UPSTREAM_ERROR, None

        if response.status_code == 401:
            log.warning("Access token rejected fetching %s", path)
            return Outcome.INVALID_TOKEN, None

        if not response.ok:
            log.error("Error fetching %s: HTTP %s", path, response.status_code)
            return Outcome.UPSTREAM_ERROR, None

        try:
            data = response.json() if response.content else {}
        except ValueError as e:
            log.error("JSON decoding error for %s: %s", path, e)
            return Outcome.UPSTREAM_ERROR, None

        if not isinstance(data, dict):
            log.error("Unexpected payload for %s: %r", path, type(data))
            return Outcome.UPSTREAM_ERROR, None

        return Outcome.OK, data

    def fetch_profile(self, token):
        outcome, data = self._get(token, '/me')
        if outcome is not Outcome.OK:
            return Result(outcome)
        return Result(Outcome.OK, UserProfile.from_payload(data))

    def fetch_top_artists(self, token, time_range=DEFAULT_TIME_RANGE, limit=50):
        outcome, data = self._get(token, '/me/top/artists', {'time_range': time_range, 'limit': limit})
        if outcome is not Outcome.OK:
            return Result(outcome)
        return _items_result(data)

    def fetch_top_tracks(self, token, time_range=DEFAULT_TIME_RANGE, limit=50):
        outcome, data = self._get(token, '/me/top/tracks', {'time_range': time_range, 'limit': limit})
        if outcome is not Outcome.OK:
            return Result(outcome)
        return _items_result(data)

    def fetch_artist_detail(self, token, artist_id):
        # not wired to any route yet
        outcome, data = self._get(token, f'/artists/{artist_id}')
        if outcome is not Outcome.OK:
            return Result(outcome)
        followers = data.get('followers')
        if not isinstance(followers, dict):
            followers = {}
        return Result(Outcome.OK, {
            'followers': followers.get('total') or 0,
            'popularity': data.get('popularity') or 0,
            'monthlyListeners': data.get('monthly_listeners') or 0,
        })

    def fetch_top_genres(self, token, time_range=DEFAULT_TIME_RANGE):
        artists = self.fetch_top_artists(token, time_range)
        if artists.failed:
            return artists
        top_genres = rank_genres(artists.value)
        return Result(Outcome.OK if top_genres else Outcome.EMPTY, top_genres)
