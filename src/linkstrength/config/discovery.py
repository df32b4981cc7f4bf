"""Locating and loading ``linkstrength.toml``.

The file is found the way git finds ``.git/``: the start directory, then
each parent.  ``LINKSTRENGTH_CONFIG`` names a file directly and disables the
search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from linkstrength.config.models import LinkConfig

CONFIG_FILENAME = "linkstrength.toml"
CONFIG_ENV_VAR = "LINKSTRENGTH_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: CWD), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )


def load_config(path: Path | None = None, cwd: Path | None = None) -> LinkConfig:
    """Validate a config file into :class:`LinkConfig` without env or CLI layers.

    With no *path*, the file is discovered from *cwd*; no file at all gives
    the defaults.
    """
    path = path or find_config(cwd)
    if path is None:
        return LinkConfig()
    with path.open("rb") as fh:
        return LinkConfig.model_validate(tomllib.load(fh))
