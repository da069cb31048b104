"""Version constraints for package references.

A reference from one package version to another package carries a version
requirement. Index authors most often write a plain version (``1.2.0``),
which means that exact version, but range operators are accepted as well.

Supported syntax:

- Any version: ``*`` or an empty string
- Exact match: ``1.0`` or ``==1.0``
- Not-equal: ``!=1.0``
- Range: ``>=1.0``, ``<=2.0``, ``>1.0``, ``<2.0``
- Caret: ``^1.2`` (same major, at least 1.2)
- Tilde: ``~1.2.3`` (same major.minor, at least 1.2.3)
- Compound (comma-separated, all must hold): ``>=1.0,<2.0``

All comparisons go through :class:`~modresolve.core.versions.ordering.Version`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from modresolve.core.versions.ordering import Version
from modresolve.exceptions import ConstraintError

_CONSTRAINT_ATOM_RE = re.compile(
    r"^\s*(?P<op>==|!=|>=|<=|>|<|\^|~)?\s*(?P<ver>[0-9A-Za-z][0-9A-Za-z\-+_.]*)\s*$"
)


def _leading_number(version: Version, index: int) -> int:
    """Return the numeric part of section *index*, or 0 when absent."""
    sections = version.raw.split(".")
    if index >= len(sections):
        return 0
    m = re.match(r"\d+", sections[index])
    return int(m.group(0)) if m else 0


@dataclass(frozen=True)
class VersionConstraint:
    """A version requirement attached to a package reference.

    Attributes:
        raw: The raw constraint string as authored (e.g., ">=1.0,<2.0").
    """

    raw: str = "*"

    @property
    def is_any(self) -> bool:
        """True if every version satisfies this constraint."""
        return self.raw.strip() in ("", "*")

    @property
    def pinned_version(self) -> str | None:
        """The exact version required, if this is a single exact atom."""
        stripped = self.raw.strip()
        if self.is_any or "," in stripped:
            return None
        m = _CONSTRAINT_ATOM_RE.match(stripped)
        if not m:
            raise ConstraintError(f"Invalid constraint atom: {stripped!r}")
        if m.group("op") in (None, "=="):
            return m.group("ver")
        return None

    def validate(self) -> VersionConstraint:
        """Check that every atom parses and return the constraint unchanged.

        Raises:
            ConstraintError: If an atom of the constraint is malformed.
        """
        if self.is_any:
            return self
        for atom in (a.strip() for a in self.raw.split(",")):
            if atom and not _CONSTRAINT_ATOM_RE.match(atom):
                raise ConstraintError(f"Invalid constraint atom: {atom!r}")
        return self

    def satisfies(self, version: str) -> bool:
        """Check whether a version tag satisfies this constraint.

        For compound constraints (comma-separated), ALL atoms must be satisfied
        (conjunction semantics).

        Args:
            version: A version tag (e.g., "1.2.3").

        Returns:
            True if the version satisfies every atom in this constraint.

        Raises:
            ConstraintError: If an atom of the constraint is malformed.
        """
        if self.is_any:
            return True

        ver = Version(version)
        atoms = [a.strip() for a in self.raw.split(",") if a.strip()]
        for atom in atoms:
            if not self._atom_satisfies(atom, ver):
                return False
        return True

    @staticmethod
    def _atom_satisfies(atom: str, ver: Version) -> bool:
        """Evaluate a single constraint atom against a parsed version."""
        m = _CONSTRAINT_ATOM_RE.match(atom)
        if not m:
            raise ConstraintError(f"Invalid constraint atom: {atom!r}")

        op = m.group("op") or "=="
        target = Version(m.group("ver"))

        if op == "==":
            return ver == target
        elif op == "!=":
            return ver != target
        elif op == ">=":
            return ver >= target
        elif op == "<=":
            return ver <= target
        elif op == ">":
            return ver > target
        elif op == "<":
            return ver < target
        elif op == "^":
            major = _leading_number(target, 0)
            if major == 0:
                return (
                    _leading_number(ver, 0) == 0
                    and _leading_number(ver, 1) == _leading_number(target, 1)
                    and ver >= target
                )
            return _leading_number(ver, 0) == major and ver >= target
        elif op == "~":
            return (
                _leading_number(ver, 0) == _leading_number(target, 0)
                and _leading_number(ver, 1) == _leading_number(target, 1)
                and ver >= target
            )
        else:  # pragma: no cover
            raise ConstraintError(f"Unknown operator: {op!r}")

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"VersionConstraint({self.raw!r})"


ANY_VERSION = VersionConstraint("*")
