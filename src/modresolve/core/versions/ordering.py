"""Version ordering for package version tags.

Package authors do not follow a single versioning scheme: tags such as
``1.7.10``, ``2.0``, ``1.0-beta`` and ``3.2rc1`` all appear in the wild. This
module provides a total order over such tags that compares dot-separated
sections numerically, never lexically, so that ``1.10`` sorts after ``1.9``.

Ordering rules
--------------
- Tags are split on ``.`` into sections. Missing trailing sections compare as
  ``0``, so ``1.0`` and ``1.0.0`` are equal.
- A section with a leading number compares by that number first.
- A trailing suffix after the number (``0-beta``, ``0rc1``) ranks *before*
  the bare number, so ``1.0-beta < 1.0``. Two suffixes compare lexically.
- A section without a leading number ranks before any numbered section and
  compares lexically against other unnumbered sections.
"""

from __future__ import annotations

import re
from functools import total_ordering

_SECTION_RE = re.compile(r"^(?P<num>\d*)(?P<rest>.*)$")

# Key used to pad the shorter of two versions.
_ZERO_KEY: tuple[int, int, int, str] = (1, 0, 1, "")


def _section_key(section: str) -> tuple[int, int, int, str]:
    """Return a sortable key for one dot-separated section."""
    m = _SECTION_RE.match(section.strip())
    num = m.group("num") if m else ""
    rest = m.group("rest") if m else section
    if not num:
        return (0, 0, 0, section.strip())
    return (1, int(num), 0 if rest else 1, rest)


@total_ordering
class Version:
    """A comparable version tag.

    Example::

        >>> Version("1.10") > Version("1.9")
        True
        >>> Version("1.0") == Version("1.0.0")
        True
        >>> sorted(["1.2", "1.10", "1.0-beta"], key=Version)
        ['1.0-beta', '1.2', '1.10']

    Attributes:
        raw: The tag exactly as authored.
    """

    __slots__ = ("raw", "_keys")

    def __init__(self, raw: str) -> None:
        if raw is None:
            raise ValueError("Version tag must not be None")
        self.raw = str(raw).strip()
        self._keys = tuple(_section_key(s) for s in self.raw.split("."))

    def _compare(self, other: Version) -> int:
        length = max(len(self._keys), len(other._keys))
        for i in range(length):
            a = self._keys[i] if i < len(self._keys) else _ZERO_KEY
            b = other._keys[i] if i < len(other._keys) else _ZERO_KEY
            if a != b:
                return -1 if a < b else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        keys = list(self._keys)
        while keys and keys[-1] == _ZERO_KEY:
            keys.pop()
        return hash(tuple(keys))

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Version({self.raw!r})"


def compare_versions(a: str, b: str) -> int:
    """Compare two version tags.

    Returns:
        -1 if *a* sorts before *b*, 1 if after, 0 if they are equal.
    """
    return Version(a)._compare(Version(b))
