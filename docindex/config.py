from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any
import json
import os
import re

import yaml

from docindex.content.query import SORT_ORDERS, QueryOptions
from docindex.domain.pagination import DEFAULT_PER_PAGE
from docindex.exceptions import ConfigurationError

PRODUCTION_ENV_VARS = ("DOCINDEX_ENV", "NODE_ENV")

_env_ref_re = re.compile(r"\$\{([^:}]+):-?([^}]*)\}")


@dataclass(frozen=True)
class ContentConfig:
    root: str = "content"
    extensions: list[str] = field(default_factory=lambda: [".md"])


@dataclass(frozen=True)
class QueryConfig:
    hide_drafts: bool = False
    meta_only: bool = True
    order: str = "desc"
    per_page: int = DEFAULT_PER_PAGE


@dataclass(frozen=True)
class AppConfig:
    content: ContentConfig = field(default_factory=ContentConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    production: bool = False

    def query_options(self, **overrides: Any) -> QueryOptions:
        """Query options seeded from this configuration."""
        values: dict[str, Any] = {
            "hide_drafts": self.query.hide_drafts,
            "production": self.production,
            "meta_only": self.query.meta_only,
            "order": self.query.order,
        }
        values.update(overrides)
        return QueryOptions(**values)


def _expand_env_var(value: str) -> str:
    """Expand environment variables in the form ${VAR:-default}."""

    def replace_env(match):
        return os.environ.get(match.group(1), match.group(2))

    return _env_ref_re.sub(replace_env, value)


def _expand_env(value):
    """Recursively expand env vars in strings inside dicts/lists."""
    if isinstance(value, str):
        return _expand_env_var(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _coalesce(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _coalesce(merged[key], value)
        else:
            merged[key] = value
    return merged


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on", "production"}
    return bool(value)


def _from_dict(data: dict[str, Any]) -> AppConfig:
    try:
        content = ContentConfig(**data.get("content", {}))
        query = QueryConfig(**data.get("query", {}))
    except TypeError as exc:
        raise ConfigurationError(f"unknown configuration key ({exc})") from exc

    if query.order not in SORT_ORDERS:
        raise ConfigurationError("query.order must be 'asc' or 'desc'", item=query.order)
    if not isinstance(query.per_page, int) or query.per_page < 1:
        raise ConfigurationError("query.per_page must be a positive integer", item=query.per_page)

    return AppConfig(
        content=content,
        query=replace(query, hide_drafts=_as_bool(query.hide_drafts), meta_only=_as_bool(query.meta_only)),
        production=_as_bool(data.get("production", False)),
    )


def load_config(path: str | Path | None) -> AppConfig:
    """Load configuration from a YAML or JSON file.

    Args:
        path: Config file path, or None for the defaults

    Returns:
        AppConfig merged over the defaults

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ConfigurationError: If the file holds unknown keys or invalid values
    """
    if path is None:
        return AppConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    raw = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".json"}:
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw) or {}
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigurationError(f"unable to parse config ({exc})", item=path) from exc

    if not isinstance(data, dict):
        raise ConfigurationError("configuration must be a mapping", item=path)

    # Shorthand: top-level content_root.
    if "content_root" in data:
        content_data = data.get("content") or {}
        content_data["root"] = data.pop("content_root")
        data["content"] = content_data

    defaults = AppConfig()
    default_dict = {
        "content": dict(defaults.content.__dict__),
        "query": dict(defaults.query.__dict__),
        "production": defaults.production,
    }
    merged = _coalesce(default_dict, _expand_env(data))
    return _from_dict(merged)


def is_production_env(environ: dict[str, str] | None = None) -> bool:
    environ = os.environ if environ is None else environ
    return any(environ.get(name, "").strip().lower() == "production" for name in PRODUCTION_ENV_VARS)


def load_env_production(config: AppConfig, environ: dict[str, str] | None = None) -> AppConfig:
    """Turn on the production flag when the build environment says so."""
    if is_production_env(environ) and not config.production:
        return replace(config, production=True)
    return config


def resolve_path(value: str, base: Path | None = None) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    base = base or Path.cwd()
    return (base / path).resolve()
