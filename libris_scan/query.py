"""Search query cleanup for eBook filenames."""

import re
from typing import Sequence

# Matches nothing; used when no filters are configured.
_NEVER_MATCHES = "$^"


def build_query(raw_title: str, noise_patterns: Sequence[str]) -> str:
    """Strip uploader/site tags from a filename so it can be used as a search query."""
    pattern = "|".join(noise_patterns) if noise_patterns else _NEVER_MATCHES
    return re.sub(pattern, "", raw_title or "", flags=re.IGNORECASE).strip()
