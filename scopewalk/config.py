"""Unified configuration loader for scopewalk.

Configuration is resolved in priority order: **project > user > defaults**.

1. **Project-level** — ``.scopewalk.yml`` in (or above) the document's
   directory.  Checked into version control, shared by the team.
2. **User-level** — ``~/.scopewalk/config.yml``.
   Personal defaults across all projects.
3. **Built-in defaults** — the tables in :mod:`scopewalk.scanner.scopes`.

Both files share the same format::

    # .scopewalk.yml  or  ~/.scopewalk/config.yml
    markup:
      skipped_scopes:       # replaces the default skip tags
        - script
        - style
        - pre
        - figure
      ignored_classes:      # added to the default skip classes
        - highlight
      ignored_scopes:       # replaces the default masked tags
        - tt
        - code

Project-level values override user-level values.  CLI flags override both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".scopewalk.yml"
USER_CONFIG_DIR = Path.home() / ".scopewalk"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.yml"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class MarkupConfig:
    """Markup sub-configuration (empty lists mean "use the defaults")."""

    skipped_scopes: list[str] = field(default_factory=list)
    ignored_classes: list[str] = field(default_factory=list)
    ignored_scopes: list[str] = field(default_factory=list)


@dataclass
class ScopewalkConfig:
    """Top-level configuration container."""

    markup: MarkupConfig = field(default_factory=MarkupConfig)

    # Where the effective config was loaded from (None = defaults only).
    project_config_path: str | None = None
    user_config_path: str | None = None


# ---------------------------------------------------------------------------
# Public loaders
# ---------------------------------------------------------------------------


def load_config(
    scan_path: str | None = None,
    config_path: str | Path | None = None,
) -> ScopewalkConfig:
    """Load merged configuration (project > user > defaults).

    Parameters
    ----------
    scan_path:
        Directory to search for ``.scopewalk.yml``.  When *None*, only
        the user-level file (and defaults) are considered.
    config_path:
        Explicit config file path.  When given, *only* this file is
        loaded (no project/user search).
    """
    if config_path is not None:
        raw = _load_yaml(Path(config_path))
        return ScopewalkConfig(
            markup=_raw_to_markup(_merge_markup(raw, None)),
            project_config_path=str(config_path),
        )

    user_raw = _load_yaml(USER_CONFIG_PATH)
    user_source = str(USER_CONFIG_PATH) if user_raw else None

    project_raw: dict | None = None
    project_source: str | None = None
    if scan_path is not None:
        project_path = _find_project_config(scan_path)
        if project_path is not None:
            project_raw = _load_yaml(project_path)
            project_source = str(project_path)

    cfg = ScopewalkConfig(
        markup=_raw_to_markup(_merge_markup(project_raw, user_raw)),
        project_config_path=project_source,
        user_config_path=user_source,
    )
    logger.debug(
        "Resolved config (project=%s, user=%s): %s",
        project_source, user_source, cfg.markup,
    )
    return cfg


def load_markup_config(
    scan_path: str | None = None,
    config_path: str | Path | None = None,
) -> MarkupConfig:
    """Load the markup portion of the merged config."""
    return load_config(scan_path=scan_path, config_path=config_path).markup


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _find_project_config(scan_path: str) -> Path | None:
    """Search for ``.scopewalk.yml`` in *scan_path* and ancestors."""
    p = Path(scan_path)
    candidates = [p / CONFIG_FILENAME]
    for parent in p.parents:
        candidates.append(parent / CONFIG_FILENAME)
        if (parent / ".git").exists():
            break
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _load_yaml(path: Path) -> dict | None:
    """Load a YAML file, returning *None* on missing/invalid files."""
    path = path.expanduser()
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return None
    return raw if isinstance(raw, dict) else None


def _merge_markup(project: dict | None, user: dict | None) -> dict:
    """Merge the ``markup`` sections key by key (project wins)."""
    merged: dict = {}
    for raw in (user, project):
        section = raw.get("markup") if raw else None
        if isinstance(section, dict):
            merged.update(section)
    return merged


def _raw_to_markup(section: dict) -> MarkupConfig:
    return MarkupConfig(
        skipped_scopes=_as_list(section.get("skipped_scopes")),
        ignored_classes=_as_list(section.get("ignored_classes")),
        ignored_scopes=_as_list(section.get("ignored_scopes")),
    )


def _as_list(val: object) -> list[str]:
    """Coerce a scalar or list to a list of strings."""
    if isinstance(val, list):
        return [str(v) for v in val]
    if isinstance(val, str):
        return [val]
    return []
