"""Stop-name normalization shared by ingestion and queries."""

from __future__ import annotations

DIRECTION_FLAGS = frozenset({"NB", "SB", "EB", "WB"})


def normalize_stop_name(name: str) -> str:
    """Upper-case ``name`` and move a leading direction flag to the end.

    Feed names such as ``"WB HASTINGS ST FS HOLDOM AVE"`` become
    ``"HASTINGS ST FS HOLDOM AVE WB"`` so that prefix searches on the
    street name find them.

    >>> normalize_stop_name("wb hastings st")
    'HASTINGS ST WB'
    >>> normalize_stop_name("Flagstop")
    'FLAGSTOP'
    """
    text = " ".join(name.split()).upper()
    flag, _, rest = text.partition(" ")
    if flag in DIRECTION_FLAGS and rest:
        return f"{rest} {flag}"
    return text
