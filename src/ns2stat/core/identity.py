"""Identity utilities for deterministic IDs.

- game_id: SHA256 of the raw round file, so re-ingesting the same file
  is a no-op while an edited file counts as a new game
"""

import hashlib


def compute_game_id(raw: bytes) -> str:
    """Compute deterministic game_id from raw file bytes.

    Args:
        raw: Raw round file content.

    Returns:
        64-character hex string (SHA256)
    """
    return hashlib.sha256(raw).hexdigest()
