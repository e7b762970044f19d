from __future__ import annotations

import os
from pathlib import Path

import platformdirs
import yaml
from dotenv import load_dotenv

APP_NAME = "crpt-api"


def _resolve_dir(*, require_existing: bool = False) -> Path | None:
    """Resolve the config directory.

    Priority: 1) CRPT_CONFIG_DIR, 2) dev repo layout, 3) platformdirs user directory.
    With *require_existing*, the platformdirs fallback is only returned when the
    directory already exists (None otherwise).
    """
    from_env = os.environ.get("CRPT_CONFIG_DIR")
    if from_env:
        return Path(from_env)
    # Development layout: src/crpt/config.py -> ../../.. = project root
    project_root = Path(__file__).resolve().parent.parent.parent
    candidate = project_root / "config"
    if candidate.is_dir():
        return candidate
    pd = Path(platformdirs.user_config_dir(APP_NAME))
    if require_existing and not pd.is_dir():
        return None
    return pd


# Load .env: cwd first (highest priority), then config dir (won't override)
load_dotenv()
_cfg_dir = _resolve_dir(require_existing=True)
if _cfg_dir is not None:
    load_dotenv(_cfg_dir / ".env")


def get_config_dir() -> Path:
    """Resolve config directory. Re-evaluated on each call to pick up env changes."""
    return _resolve_dir()


CRPT_API_URL = "https://ismp.crpt.ru/api/v3/"
DOCUMENTS_API_URL = CRPT_API_URL + "lk/documents/"
DOCUMENT_ACTION = "create"
DOCUMENT_CREATE_URL = DOCUMENTS_API_URL + DOCUMENT_ACTION
JSON_MEDIA_TYPE = "application/json"

DEFAULT_TIME_UNIT = "SECONDS"
DEFAULT_REQUEST_LIMIT = 10


# --- YAML config ---


def load_yaml(path: Path) -> dict:
    """Load and parse a YAML file, returning the top-level dict.

    An empty file gives ``{}``. Raises ValueError if the top level is not a mapping
    and yaml.YAMLError if the file does not parse.
    """
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        name = type(data).__name__
        raise ValueError(f"{path}: expected a mapping at the top level, got {name}")
    return data


def load_settings() -> dict:
    """Return the rate-limit settings as ``{"time_unit": str, "request_limit": int}``.

    Values come from config/settings.yaml when present; the CRPT_TIME_UNIT and
    CRPT_REQUEST_LIMIT env vars take priority over the file.
    """
    path = get_config_dir() / "settings.yaml"
    data = load_yaml(path) if path.is_file() else {}

    time_unit = os.environ.get("CRPT_TIME_UNIT") or data.get("time_unit", DEFAULT_TIME_UNIT)
    limit = os.environ.get("CRPT_REQUEST_LIMIT")
    if limit is None:
        limit = data.get("request_limit", DEFAULT_REQUEST_LIMIT)

    return {"time_unit": str(time_unit), "request_limit": int(limit)}


def load_document(path: Path) -> dict:
    """Load a document definition from a YAML file."""
    return load_yaml(path)
