from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import yaml

from xfractals.coloring import scheme_name
from xfractals.iterators import ITERATION_CAP, FractalKind
from xfractals.utils import parse_kind
from xfractals.viewport import GRID_HEIGHT, GRID_WIDTH


@dataclass
class ViewerConfig:
    fractal: Optional[FractalKind] = None  # None => ask at startup
    scheme: Optional[str] = None           # None => ask at startup
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    max_iter: int = ITERATION_CAP
    workers: int = 1

    def with_overrides(self, **overrides) -> "ViewerConfig":
        """Copy with every non-None override applied (CLI flags over file values)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "fractal" in changes:
            changes["fractal"] = parse_kind(changes["fractal"])
        if "scheme" in changes:
            changes["scheme"] = scheme_name(changes["scheme"])
        return _validate(replace(self, **changes))


def config_from_dict(cfg: dict | None) -> ViewerConfig:
    cfg = cfg or {}

    fractal = cfg.get("fractal")
    scheme = cfg.get("scheme")

    config = ViewerConfig(
        fractal=parse_kind(fractal) if fractal is not None else None,
        scheme=scheme_name(scheme) if scheme is not None else None,
        width=int(cfg.get("width", GRID_WIDTH)),
        height=int(cfg.get("height", GRID_HEIGHT)),
        max_iter=int(cfg.get("max_iter", ITERATION_CAP)),
        workers=int(cfg.get("workers", 1)),
    )

    return _validate(config)


def _validate(config: ViewerConfig) -> ViewerConfig:
    if config.width <= 0 or config.height <= 0:
        raise ValueError(f"Grid size must be positive, got {config.width}x{config.height}")
    if config.max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {config.max_iter}")
    if config.workers < 1:
        raise ValueError(f"workers must be >= 1, got {config.workers}")
    return config


def load_config(config_path: str | Path | None) -> ViewerConfig:
    """Read a YAML config file; None gives the built-in defaults."""
    if config_path is None:
        return ViewerConfig()

    with open(config_path, "r") as f:
        cfg = yaml.safe_load(f)

    return config_from_dict(cfg)
