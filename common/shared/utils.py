"""
common.shared.utils

Console helpers shared across prefix tool modules.
"""

from __future__ import annotations

from typing import Any, Iterable

from tqdm import tqdm


INVALID_FILENAME_CHARS = '<>:"/\\|?*\n\r\t'


# ----------------------------------------------------------------------
# PATH UTILITIES
# ----------------------------------------------------------------------

def safe_filename(name: str) -> str:
    """
    Sanitize a filename by replacing invalid characters with underscores.
    """
    for ch in INVALID_FILENAME_CHARS:
        name = name.replace(ch, "_")
    return name.strip()


# ----------------------------------------------------------------------
# PROGRESS
# ----------------------------------------------------------------------

class Progress:
    """
    Simple wrapper for tqdm progress bars that automatically closes
    on completion or interruption.
    """

    def __init__(self, iterable: Iterable[Any], desc: str = "Processing", disable: bool = False):
        self._tqdm = tqdm(iterable, desc=desc, leave=False, dynamic_ncols=True, disable=disable)

    def __iter__(self):
        try:
            for item in self._tqdm:
                yield item
        finally:
            self._tqdm.close()


# ----------------------------------------------------------------------
# TERMINAL UTILITIES
# ----------------------------------------------------------------------

def confirm(prompt: str) -> bool:
    """
    Simple yes/no confirmation prompt. End of input counts as "no".
    """
    try:
        resp = input(f"{prompt} [y/N]: ").strip().lower()
    except EOFError:
        return False
    return resp in {"y", "yes"}
