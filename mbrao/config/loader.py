"""Locate and load ``mbrao.yaml``."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import MbraoConfig

CONFIG_FILENAME = "mbrao.yaml"
USER_CONFIG_DIR = ".mbrao"
USER_CONFIG_FILENAME = "config.yaml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first: explicit, project, user."""
    paths = [Path(cli_path)] if cli_path else []
    paths.append(Path.cwd() / CONFIG_FILENAME)
    paths.append(Path.home() / USER_CONFIG_DIR / USER_CONFIG_FILENAME)
    return paths


def read_config_file(path: Path) -> dict[str, Any] | None:
    """Env-expanded mapping stored in ``path``, or None when the file is empty."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping")
    return _expand_env_vars(raw)


def load_config(cli_path: str | None = None) -> MbraoConfig:
    """Build the config from the first non-empty file found; defaults when there is none.

    Raises ValueError for a missing explicit path, unreadable YAML or invalid values.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        data = read_config_file(path)
        if data is None:
            continue
        try:
            return MbraoConfig(**data)
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return MbraoConfig()


def _expand_env_vars(obj: Any) -> Any:
    """Replace ``${VAR}`` in every string value; unset variables become empty."""
    if isinstance(obj, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Written by `mbrao config init`
DEFAULT_CONFIG_TEMPLATE = f"""\
# {CONFIG_FILENAME}: values used when parse/render options leave them out

locale: "en"
parsing_engine: "plain_text"
rendering_engine: "html_pipeline"

rendering:
  extensions: ["extra", "toc", "sane_lists"]
  output_format: "html"          # html | xhtml

log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
