from __future__ import annotations

import logging
import re

from .resolver import loads_strict
from .types import ParsedReply

logger = logging.getLogger(__name__)

# First ```json fenced block only; the interior is matched non-greedily.
JSON_BLOCK_PATTERN = re.compile(r"```json\s*([\s\S]*?)\s*```")


def parse_reply(raw_reply: str) -> ParsedReply:
    """Split a model reply into prose and the embedded JSON block.

    A reply without a block, or with a block that does not decode, comes back
    unchanged with ``json=None``.
    """
    match = JSON_BLOCK_PATTERN.search(raw_reply)
    if not match or not match.group(1):
        return ParsedReply(text=raw_reply)

    try:
        decoded = loads_strict(match.group(1))
    except ValueError as error:
        logger.warning("parse.invalid_json_block error=%s", error)
        return ParsedReply(text=raw_reply)

    remaining = raw_reply[: match.start()] + raw_reply[match.end():]
    return ParsedReply(text=remaining.strip(), json=decoded)
