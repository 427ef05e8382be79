"""Station name text processing utilities."""

import re

# Separators between words of a station name, e.g.
# "САНКТ-ПЕТЕРБУРГ-ГЛАВН. (МОСКОВСКИЙ ВОКЗАЛ)"
_WORD_SEPARATORS = re.compile(r"[\s\-().,]+")


def normalize_query(text: str) -> str:
    """Normalize user input for station search.

    Trims the text, collapses inner whitespace and upper-cases it, since
    station names are stored in upper case by the server.
    """
    return re.sub(r"\s+", " ", text).strip().upper()


def normalize_message(text: str) -> str:
    """Normalize a server message: trimmed, lower case, no trailing period."""
    message = text.strip().lower()
    if message.endswith("."):
        message = message[:-1].rstrip()
    return message


def matches_word_prefix(name: str, prefix: str) -> bool:
    """Check whether the name or any word of it starts with the prefix.

    The server matches only the first two letters of a query, so the full
    query has to be checked against the returned names.

    Examples:
        matches_word_prefix("ВОЕННЫЙ ГОРОДОК", "гор") -> True
        matches_word_prefix("САНКТ-ПЕТЕРБУРГ-ГЛАВН", "пет") -> True
    """
    name = normalize_query(name)
    prefix = normalize_query(prefix)
    if not name or not prefix:
        return False

    if name.startswith(prefix):
        return True

    return any(
        word.startswith(prefix) for word in _WORD_SEPARATORS.split(name) if word
    )
