"""Shared CLI options and input loading.

Every command reads the same inputs: an index document, an installed
snapshot and an optional YAML configuration. Problems with any of them are
reported as ``Error: ...`` and exit with code 2.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, NoReturn

import click

from modresolve.cli.prompt import PromptSelector
from modresolve.config import ResolverConfig, load_config
from modresolve.core.dependency import DependencyResolver
from modresolve.core.index import InMemoryVersionIndex
from modresolve.core.installed import InstalledPackages
from modresolve.core.selection import (
    LatestVersionSelector,
    PinnedVersionSelector,
    VersionSelector,
)
from modresolve.exceptions import ModResolveError


def index_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--index", "index_path",
        type=click.Path(exists=True, dir_okay=False),
        required=True,
        help="Index document listing known packages and versions.",
    )(func)


def installed_option(required: bool) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return click.option(
        "--installed", "installed_path",
        type=click.Path(exists=True, dir_okay=False),
        required=required,
        help="Snapshot of installed packages.",
    )


def config_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--config", "config_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML resolver configuration.",
    )(func)


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}")
    sys.exit(2)


def load_index(path: str) -> InMemoryVersionIndex:
    try:
        return InMemoryVersionIndex.read(Path(path))
    except (ModResolveError, OSError) as exc:
        _fail(str(exc))


def load_installed(path: str | None) -> InstalledPackages:
    if path is None:
        return InstalledPackages()
    try:
        return InstalledPackages.read(Path(path))
    except (ModResolveError, OSError) as exc:
        _fail(str(exc))


def load_settings(config_path: str | None, **overrides: Any) -> ResolverConfig:
    """Load the configuration file (if any) and apply CLI overrides."""
    try:
        config = load_config(Path(config_path)) if config_path else ResolverConfig()
    except ModResolveError as exc:
        _fail(str(exc))
    return config.merged(**overrides)


def build_selector(index: InMemoryVersionIndex, config: ResolverConfig) -> VersionSelector:
    if config.interactive:
        base: VersionSelector = PromptSelector(index, config.compatibility)
    else:
        base = LatestVersionSelector(index, config.compatibility)
    if config.pins:
        return PinnedVersionSelector(index, config.pins, base, config.compatibility)
    return base


def build_resolver(
    index: InMemoryVersionIndex,
    installed: InstalledPackages,
    config: ResolverConfig,
    **kwargs: Any,
) -> DependencyResolver:
    return DependencyResolver(
        index,
        build_selector(index, config),
        installed,
        include_soft_edges=config.include_soft_edges,
        **kwargs,
    )
