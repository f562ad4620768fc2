import os
import secrets
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

AUTH_BASE_URL = 'https://accounts.spotify.com'
API_BASE_URL = 'https://api.spotify.com/v1'

SPOTIFY_CLIENT_ID = os.getenv('SPOTIFY_CLIENT_ID')
SPOTIFY_CLIENT_SECRET = os.getenv('SPOTIFY_CLIENT_SECRET')
SPOTIFY_REDIRECT_URI = os.getenv('SPOTIFY_REDIRECT_URI', 'http://127.0.0.1:5000/callback')
SPOTIFY_TIMEOUT = float(os.getenv('SPOTIFY_TIMEOUT', '10'))

FLASK_SECRET_KEY = os.getenv('FLASK_SECRET_KEY') or secrets.token_hex(16)
PORT = int(os.getenv('PORT', '5000'))

SCOPES = (
    'user-read-email',
    'user-read-private',
    'user-top-read',
    'playlist-read-private',
    'playlist-read-collaborative',
)

SESSION_COOKIE_NAME = 'spotify-auth-session'
SESSION_MAX_AGE_HOURS = 24


@dataclass(frozen=True)
class SpotifyConfig:
    client_id: str
    client_secret: str
    redirect_uri: str
    secret_key: str
    scopes: tuple = SCOPES
    auth_base_url: str = AUTH_BASE_URL
    api_base_url: str = API_BASE_URL
    timeout: float = SPOTIFY_TIMEOUT

    @classmethod
    def from_env(cls):
        return cls(
            client_id=SPOTIFY_CLIENT_ID or '',
            client_secret=SPOTIFY_CLIENT_SECRET or '',
            redirect_uri=SPOTIFY_REDIRECT_URI,
            secret_key=FLASK_SECRET_KEY,
        )
