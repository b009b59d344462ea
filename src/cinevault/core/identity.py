"""Identity utilities for movie records.

Identifiers are assigned by the store on creation:
- new_movie_id: random UUID4 rendered as 32 lowercase hex characters
- is_valid_movie_id: shape check used to reject malformed identifiers early
"""

import re
import uuid

MOVIE_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_movie_id() -> str:
    """Generate a fresh movie identifier.

    Returns:
        32-character lowercase hex string.
    """
    return uuid.uuid4().hex


def is_valid_movie_id(movie_id: str) -> bool:
    """Check whether movie_id has the shape of a store-assigned identifier.

    Args:
        movie_id: Candidate identifier (as received in a URL path).

    Returns:
        True if the identifier could have been produced by new_movie_id.
    """
    return bool(MOVIE_ID_PATTERN.match(movie_id))
