"""
JSON helpers for the structured text columns
"""

import copy
import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

def parse_or_default(raw: Optional[str], default: Any) -> Any:
    """Parse a stored JSON document, falling back to ``default``.

    Used on display and validation paths for event form schemas,
    participation options and reservation data. A missing, unparseable or
    wrongly-typed document yields a copy of ``default`` instead of raising,
    so one corrupt row cannot take down a listing.
    """
    if raw is None or raw == "":
        return copy.deepcopy(default)
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"Discarding malformed JSON document: {raw!r:.80}")
        return copy.deepcopy(default)
    if not isinstance(value, type(default)):
        logger.warning(f"Expected {type(default).__name__} document, got {type(value).__name__}")
        return copy.deepcopy(default)
    return value

def dump_document(value: Any) -> str:
    """Serialize a mapping or list for storage"""
    return json.dumps(value, ensure_ascii=False)
