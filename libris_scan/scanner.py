"""Recursive discovery of eBook files."""

import os
from typing import Iterable, List

DEFAULT_EXTENSIONS = (".pdf", ".epub")


def list_candidate_files(root_dir: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> List[str]:
    """Absolute paths of files under root_dir with a matching extension.

    Order is whatever os.walk yields; nothing is sorted.
    """
    exts = tuple(e.lower() for e in extensions)
    found = []
    for dirpath, _, filenames in os.walk(root_dir):
        for filename in filenames:
            if filename.lower().endswith(exts):
                found.append(os.path.abspath(os.path.join(dirpath, filename)))
    return found
