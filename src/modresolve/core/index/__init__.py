"""Version index: the read-only lookup of known packages and versions."""

from modresolve.core.index.memory import InMemoryVersionIndex
from modresolve.core.index.protocols import VersionIndex

__all__ = ["InMemoryVersionIndex", "VersionIndex"]
