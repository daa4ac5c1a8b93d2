"""Reads calendar ticks from a line-oriented JSON feed."""
import json
import logging
from typing import Iterable, Iterator, Optional

from time_snapshot import TimeSnapshot


def parse_time_update(line: str) -> Optional[TimeSnapshot]:
    """
    Parse one feed line.

    Blank lines, "null" and anything that isn't a JSON object mean the feed
    had no information this tick.
    """
    text = line.strip()
    if not text:
        return None
    try:
        raw = json.loads(text)
    except ValueError as e:
        logging.debug(f"Ignoring unparseable time update {text[:100]!r}: {e}")
        return None
    return TimeSnapshot.from_dict(raw)


def iter_time_updates(lines: Iterable[str]) -> Iterator[Optional[TimeSnapshot]]:
    for line in lines:
        yield parse_time_update(line)
