"""Encoding of list-typed fields (notes, tags, variables) for storage.

Lists are persisted as JSON array text. Decoding is deliberately forgiving:
anything that is not a JSON array of values comes back as an empty list and is
never reported as an error, so malformed legacy rows stay readable.
"""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def encode_list(values: list[str] | None) -> str:
    return json.dumps(list(values or []))


def decode_list(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.debug("Discarding malformed list value: %r", raw[:80])
        return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]
