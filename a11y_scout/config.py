# === FILE: a11y_scout/config.py ===
"""
Loading and validation of A11yScout crawl configuration.
Pydantic describes the schema and checks the data; files are YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]

DEFAULT_TAGS: List[str] = ["wcag2a", "wcag2aa", "wcag2aaa"]


class RenderOptions(BaseModel):
    """How pages are rendered: engine, per-navigation timeout and load states."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    engine: Literal["browser", "http"] = Field("browser", description="Page renderer backend.")
    timeout: float = Field(30.0, gt=0, description="Timeout for one navigation (seconds).")
    analysis_wait_until: WaitUntil = Field("networkidle", description="Load state before analysis.")
    links_wait_until: WaitUntil = Field("load", description="Load state before link extraction.")
    user_agent: Optional[str] = Field(None, min_length=1, description="User-Agent override.")
    block_resources: bool = Field(False, description="Abort image/stylesheet/font/media requests.")
    headless: bool = True


class AnalysisOptions(BaseModel):
    """Which page analysis runs and how it is parameterised."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    engine: Literal["axe", "markup"] = Field("axe", description="Page analyzer.")
    axe_script: Optional[Path] = Field(None, description="Path to axe.min.js.")
    tags: List[str] = Field(default_factory=lambda: list(DEFAULT_TAGS), min_length=1)


class CrawlConfig(BaseModel):
    """Configuration for one crawl invocation."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: str = Field(..., description="Absolute URL the crawl starts from.")
    max_depth: int = Field(3, ge=0, description="Maximum link depth from the start URL.")
    max_scans: int = Field(50, gt=0, description="Hard limit on attempted page analyses.")
    concurrency: int = Field(5, gt=0, description="Pages processed together in one batch.")
    render: RenderOptions = Field(default_factory=RenderOptions)
    analysis: AnalysisOptions = Field(default_factory=AnalysisOptions)

    @field_validator("start_url", mode="before")
    def _check_start_url(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        url = v.strip()
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"start_url must be an absolute http(s) URL, got {v!r}")
        return url

    @model_validator(mode="after")
    def _check_engines(self) -> CrawlConfig:
        # the http renderer cannot run scripts, so axe would fail on every page
        if self.render.engine == "http" and self.analysis.engine == "axe":
            raise ValueError("analysis.engine 'axe' requires render.engine 'browser'; use 'markup' with 'http'")
        return self


DEFAULT_CONFIG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def read_config_data(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML or JSON config file and return its top-level mapping."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(data, dict):
        raise TypeError(f"Config top level must be a mapping, got {type(data).__name__}")
    return data


def _apply_override(data: Dict[str, Any], key: str, value: Any) -> None:
    # "render.engine" -> data["render"]["engine"]
    *parents, leaf = key.split(".")
    target = data
    for part in parents:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child
    target[leaf] = value


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Build a validated CrawlConfig from an optional file plus keyword overrides.

    Without *path* the default ``configs/default.yaml`` is used when it exists.
    Overrides set to ``None`` are ignored; nested fields use dotted keys
    (``**{"render.engine": "http"}``).
    """
    if path is None:
        data = read_config_data(DEFAULT_CONFIG) if DEFAULT_CONFIG.is_file() else {}
    else:
        data = read_config_data(path)

    for key, value in overrides.items():
        if value is not None:
            _apply_override(data, key, value)

    return CrawlConfig(**data)


__all__ = [
    "AnalysisOptions",
    "CrawlConfig",
    "DEFAULT_CONFIG",
    "RenderOptions",
    "WaitUntil",
    "load_config",
    "read_config_data",
]
