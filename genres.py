from collections import Counter
from dataclasses import dataclass

MAX_GENRES = 50
PLACEHOLDER_IMAGE = '/static/placeholder.svg'


@dataclass(frozen=True)
class GenreRank:
    rank: int
    name: str
    artist_image: str
    count: int


def _genre_image(artist):
    # second image is the mid-sized one
    images = artist.get('images') or []
    if not isinstance(images, list) or len(images) < 2 or not isinstance(images[1], dict):
        return PLACEHOLDER_IMAGE
    return images[1].get('url') or PLACEHOLDER_IMAGE


def rank_genres(artists, limit=MAX_GENRES):
    """
    Rank genres by how often they appear across the given artists.

    Every genre an artist lists is counted, duplicates included. The image
    for a genre comes from the first artist it was seen on. Ties keep the
    order in which the genres were first encountered.
    """
    counts = Counter()
    images = {}

    for artist in artists:
        if not isinstance(artist, dict):
            continue
        genres = artist.get('genres') or []
        if not isinstance(genres, list):
            continue
        for genre in genres:
            if not isinstance(genre, str):
                continue
            if genre not in counts:
                images[genre] = _genre_image(artist)
            counts[genre] += 1

    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]

    return [
        GenreRank(rank=i, name=name, artist_image=images[name], count=count)
        for i, (name, count) in enumerate(ordered, start=1)
    ]
