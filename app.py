import logging
from datetime import timedelta

from flask import Flask, abort, jsonify, render_template, redirect, request

import config
from spotify_api import DEFAULT_TIME_RANGE, TIME_RANGES, Outcome, SpotifyClient
from token_store import TokenStore

log = logging.getLogger(__name__)


def create_app(spotify_config=None):
    if spotify_config is None:
        spotify_config = config.SpotifyConfig.from_env()

    app = Flask(__name__)

    app.secret_key = spotify_config.secret_key
    app.config['SESSION_COOKIE_NAME'] = config.SESSION_COOKIE_NAME
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(hours=config.SESSION_MAX_AGE_HOURS)
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    spotify = SpotifyClient(spotify_config)
    tokens = TokenStore()

    def time_range_arg():
        time_range = request.args.get('time_range', DEFAULT_TIME_RANGE)
        if time_range not in TIME_RANGES:
            log.warning("Rejected time_range %r", time_range)
            return None
        return time_range

    @app.route('/')
    def index():
        return render_template('index.html', signed_in=bool(tokens.get().access_token))

    @app.route('/login')
    def login():
        auth_url = spotify.authorize_url()
        log.info("Redirecting to Spotify authorization")
        return redirect(auth_url)

    @app.route('/callback')
    def callback():
        if request.args.get('error'):
            log.info("Authorization denied: %s", request.args.get('error'))
            return redirect('/')

        code = request.args.get('code')
        if not code:
            log.warning("Callback without an authorization code")
            return redirect('/')

        token = spotify.exchange_code(code)
        if token is None:
            return redirect('/')

        tokens.clear()
        tokens.set(token['access_token'], token['refresh_token'])
        log.info("Access token stored in session")
        return redirect('/stats')

    @app.route('/logout')
    def logout():
        tokens.clear()
        return redirect('/')

    @app.route('/stats')
    def stats():
        access_token = tokens.get().access_token
        if not access_token:
            log.info("No access token in session. Redirecting to /.")
            tokens.clear()
            return redirect('/')

        profile = spotify.fetch_profile(access_token)

        if profile.outcome is Outcome.INVALID_TOKEN:
            log.info("Invalid access token. Redirecting to /.")
            tokens.clear()
            return redirect('/')

        if profile.failed:
            log.info("No user data found.")
            return render_template('stats.html', no_data=True)

        return render_template('stats.html', profile=profile.value, no_data=False)

    def top_items_page(fetch, template, name):
        access_token = tokens.get().access_token
        if not access_token:
            return redirect('/')

        time_range = time_range_arg()
        if time_range is None:
            abort(400)

        result = fetch(access_token, time_range)
        if result.failed:
            if result.outcome is Outcome.INVALID_TOKEN:
                tokens.clear()
            return redirect('/login')

        return render_template(template, time_range=time_range, **{name: result.value})

    @app.route('/top-artists')
    def top_artists():
        return top_items_page(spotify.fetch_top_artists, 'top-artists.html', 'top_artists')

    @app.route('/top-tracks')
    def top_tracks():
        return top_items_page(spotify.fetch_top_tracks, 'top-tracks.html', 'top_tracks')

    @app.route('/top-genres')
    def top_genres():
        return top_items_page(spotify.fetch_top_genres, 'top-genres.html', 'top_genres')

    @app.route('/top-artists-data')
    def top_artists_data():
        access_token = tokens.get().access_token
        if not access_token:
            return jsonify({'error': 'Unauthorized'}), 401

        time_range = time_range_arg()
        if time_range is None:
            return jsonify({'error': 'Invalid time_range'}), 400

        result = spotify.fetch_top_artists(access_token, time_range)

        if result.outcome is Outcome.INVALID_TOKEN:
            tokens.clear()
            return jsonify({'error': 'Unauthorized'}), 401

        if result.failed:
            return jsonify({'error': 'Failed to fetch top artists'}), 500

        return jsonify(result.value)

    return app


app = create_app()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(port=config.PORT, debug=True)
