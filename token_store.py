from dataclasses import dataclass

from flask import session


@dataclass(frozen=True)
class Session:
    access_token: str = None
    refresh_token: str = None


class TokenStore:
    """
    Access/refresh tokens kept in Flask's signed cookie session.

    Nothing is stored server-side. A cookie that fails the signature check
    loads as an empty session, so it reads back as an anonymous user.
    """

    def get(self):
        return Session(
            access_token=session.get('accessToken'),
            refresh_token=session.get('refreshToken'),
        )

    def set(self, access_token, refresh_token):
        session.permanent = True
        session['accessToken'] = access_token
        session['refreshToken'] = refresh_token

    def clear(self):
        session.clear()
