"""Resolver configuration.

Settings can be kept in a YAML file so that the same choices apply to every
CLI invocation::

    compatibility: "1.7.10"
    include_soft_edges: false
    interactive: false
    pins:
      core-lib: "2.0.1"

Command-line flags override values loaded from the file.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from modresolve.exceptions import ConfigError

_BOOL_KEYS = ("include_soft_edges", "interactive")


@dataclass(frozen=True)
class ResolverConfig:
    """Settings that shape a resolution.

    Attributes:
        compatibility: Only consider versions supporting this context
            (e.g. a game version). None considers every version.
        include_soft_edges: Treat soft dependencies as graph edges when
            computing orphans and dependents.
        interactive: Ask on the terminal whenever a version must be chosen.
        pins: Package identifier to version tag, preferred over the newest
            version whenever the pin satisfies the requirement.
    """

    compatibility: str | None = None
    include_soft_edges: bool = False
    interactive: bool = False
    pins: dict[str, str] = field(default_factory=dict)

    def merged(self, **overrides: Any) -> ResolverConfig:
        """Return a copy with every non-None override applied.

        ``pins`` overrides are merged into the existing pins.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "pins" in changes:
            changes["pins"] = {**self.pins, **changes["pins"]}
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResolverConfig:
        """Validate and build a config from parsed YAML.

        Raises:
            ConfigError: On unknown keys or wrongly typed values.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        known = {"compatibility", "pins", *_BOOL_KEYS}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        for key in _BOOL_KEYS:
            if key in data and not isinstance(data[key], bool):
                raise ConfigError(f"{key!r} must be true or false")

        compatibility = data.get("compatibility")
        if compatibility is not None and not isinstance(compatibility, str):
            raise ConfigError("'compatibility' must be a quoted string")

        pins = data.get("pins") or {}
        if not isinstance(pins, dict):
            raise ConfigError("'pins' must be a mapping of package to version")
        for uid, tag in pins.items():
            if not isinstance(tag, str):
                raise ConfigError(f"Pin for {uid!r} must be a quoted version string")

        return cls(
            compatibility=compatibility,
            include_soft_edges=data.get("include_soft_edges", False),
            interactive=data.get("interactive", False),
            pins={str(k): v for k, v in pins.items()},
        )


def load_config(path: Path) -> ResolverConfig:
    """Load a ``ResolverConfig`` from a YAML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid YAML.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot load configuration from {path}: {exc}") from exc
    return ResolverConfig.from_dict(data)
