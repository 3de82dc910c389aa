"""Content fingerprints for theme assets.

The remote theme reports an md5 hex digest per asset. JSON files outside
``assets/`` are stored normalized by the remote, so they are normalized
here before hashing to keep local and remote fingerprints comparable.
"""

from __future__ import annotations

import base64
import hashlib
import json
import logging

logger = logging.getLogger(__name__)


def _is_normalized_json(key: str) -> bool:
    return key.endswith(".json") and not key.startswith("assets/")


def normalize_json(content: str) -> str:
    """Return the compact representation of a JSON document.

    Forward slashes are escaped the way the remote serializer does.

    Raises:
        ValueError: If the content is not valid JSON.
    """
    data = json.loads(content)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).replace("/", "\\/")


def compute_checksum(key: str, content: bytes | str) -> str:
    """Compute the md5 hex digest of an asset's content.

    Args:
        key: Asset key, used to decide whether JSON normalization applies.
        content: Raw bytes or decoded text.

    Returns:
        Hex digest string.
    """
    if _is_normalized_json(key):
        text = content.decode("utf-8") if isinstance(content, bytes) else content
        try:
            content = normalize_json(text)
        except ValueError:
            logger.debug(f"Could not parse {key} as JSON, hashing raw content")
            content = text

    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.md5(content).hexdigest()


def compute_attachment_checksum(attachment: str) -> str:
    """Compute the md5 hex digest of a base64 encoded attachment."""
    return hashlib.md5(base64.b64decode(attachment)).hexdigest()
