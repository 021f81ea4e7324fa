"""File collaborators: the whitespace-delimited city loader and the `.tour` writer."""
from __future__ import annotations
import logging
import re
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

_INT_TOKEN = re.compile(r"[+-]?[0-9]+")


def load_cities(path: str) -> List[Tuple[int, int]]:
    """Read `(id, x, y)` integer triples and return the `(x, y)` coordinates.

    The id field is dropped; a city's index is its position in the file.
    Reading stops at the first token that is not an integer. An unreadable
    path raises OSError.
    """
    logger.info("Reading data from file %s ...", path)
    # undecodable bytes become U+FFFD, which ends the read like any other non-integer
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        tokens = f.read().split()

    values: List[int] = []
    for tok in tokens:
        if not _INT_TOKEN.fullmatch(tok):
            logger.warning("Stopped reading %s at non-integer token %r", path, tok)
            break
        values.append(int(tok))

    if len(values) % 3:
        logger.warning("Ignoring incomplete trailing record in %s", path)

    cities = [(values[k + 1], values[k + 2]) for k in range(0, len(values) - 2, 3)]
    logger.info("Read %d cities.", len(cities))
    return cities


def write_tour(input_path: str, order: Sequence[int], cost) -> Optional[str]:
    """Write `<input_path>.tour`: the cost, then one city index per line.

    Returns the written path, or None (after logging a warning) when the file
    cannot be written.
    """
    out_path = f"{input_path}.tour"
    try:
        with open(out_path, "w") as f:
            f.write(f"{cost}\n")
            for city in order:
                f.write(f"{city}\n")
    except OSError as e:
        logger.warning("Unable to write to %s: %s", out_path, e)
        return None
    logger.info("Results written to %s, review file for results.", out_path)
    return out_path
