"""Field-name normalization for CloudAPI response bodies.

CloudAPI mixes camelCase and snake_case and has renamed fields between API
versions. Known aliases are renamed to the canonical snake_case names
before any typed decoding happens. Renaming works on the parsed JSON tree,
so string values that happen to look like a key are never touched.
"""

import json
from typing import Any

from .errors import DecodeError

# Wire name -> canonical name. When several aliases of one canonical name
# appear in the same object, the one listed first wins.
FIELD_ALIASES: dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "companyName": "company_name",
    "primaryIp": "primary_ip",
    "created_timestamp": "created_at",
    "created": "created_at",
    "updated": "updated_at",
    "scheduled_timestamp": "scheduled_at",
}


def _winning_aliases(obj: dict[str, Any]) -> dict[str, str]:
    """Pick, per canonical name, the single key of ``obj`` to rename."""
    chosen: dict[str, str] = {}
    claimed: set[str] = set()
    for alias, canonical in FIELD_ALIASES.items():
        if alias not in obj or canonical in obj or canonical in claimed:
            continue
        chosen[alias] = canonical
        claimed.add(canonical)
    return chosen


def normalize_keys(tree: Any) -> Any:
    """Return a copy of a parsed JSON tree with aliased keys renamed.

    Objects are renamed at every depth and keep their key order. A key that
    is already canonical is never overwritten; losing aliases stay as they
    are. Applying this twice gives the same result as applying it once.
    """
    if isinstance(tree, list):
        return [normalize_keys(item) for item in tree]
    if not isinstance(tree, dict):
        return tree

    renames = _winning_aliases(tree)
    return {
        renames.get(key, key): normalize_keys(value) for key, value in tree.items()
    }


def parse_json(text: str) -> Any:
    """Parse response text, raising DecodeError with the raw text attached."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        msg = f"Response body is not valid JSON: {error}"
        raise DecodeError(msg, raw=text) from error


def normalize(text: str) -> str:
    """Normalize field names in a raw JSON body and re-serialize it compactly.

    Empty bodies are returned unchanged.
    """
    if not text.strip():
        return text
    tree = normalize_keys(parse_json(text))
    return json.dumps(tree, separators=(",", ":"), ensure_ascii=False)
