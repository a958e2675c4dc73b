## Copyright (c) 2026 minsurf contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Viewer configuration with YAML file and environment override support.

Settings are resolved in this order:
    1. An explicit path passed to ``load_config``
    2. The file named by the ``MINSURF_CONFIG`` environment variable
    3. The user config file (~/.config/minsurf/config.yaml)
    4. Built-in defaults

Example file::

    surface: sievert
    surface_params:
      c: 0.5
    u_steps: 80
    v_steps: 40
    topology: surface
    view_distance: 0
    view_direction: [0, 0, 10]
    view_up: [0, 1, 0]
    rotation_center: [0, 0, 0]
    width: 800
    height: 800
"""

from __future__ import annotations

import logging
import math
import os
import sys
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from minsurf.surfaces import ParametricSurface, make_surface
from minsurf.tessellate import DEFAULT_STEPS, Topology, resolve_steps, tessellate
from minsurf.trackball import (
    DEFAULT_VIEW_DIRECTION,
    DEFAULT_VIEW_UP,
    TrackballRotator,
)

logger = logging.getLogger(__name__)

__all__ = [
    "MINSURF_CONFIG",
    "ConfigError",
    "ViewerConfig",
    "load_config",
    "user_config_path",
]

# Environment variable naming a config file
MINSURF_CONFIG = "MINSURF_CONFIG"

Vec3 = Tuple[float, float, float]


class ConfigError(ValueError):
    """Raised for malformed configuration values."""


def _vector(name, value) -> Optional[Vec3]:
    if value is None:
        return None
    if (not isinstance(value, (list, tuple)) or len(value) != 3 or
            any(isinstance(c, bool) or not isinstance(c, (int, float)) for c in value)):
        raise ConfigError(f"'{name}' must be a list of three numbers, got {value!r}")
    return (float(value[0]), float(value[1]), float(value[2]))


def _positive(name, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
        raise ConfigError(f"'{name}' must be a positive number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class ViewerConfig:
    """Everything needed to build a surface mesh and a trackball."""

    surface: str = "richmond"
    surface_params: Dict[str, Any] = field(default_factory=dict)
    u_steps: int = DEFAULT_STEPS
    v_steps: int = DEFAULT_STEPS
    topology: str = Topology.SURFACE.value
    view_distance: Optional[float] = None
    view_direction: Vec3 = DEFAULT_VIEW_DIRECTION
    view_up: Vec3 = DEFAULT_VIEW_UP
    rotation_center: Optional[Vec3] = None
    width: float = 800.0
    height: float = 800.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ViewerConfig":
        """Validate a mapping (usually parsed YAML) into a config."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a mapping at the top level")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {unknown}")
        return cls().updated(**data)

    def updated(self, **changes) -> "ViewerConfig":
        """Return a validated copy with ``changes`` applied.  ``None``
        values for step counts fall back to the default."""
        merged = {f.name: getattr(self, f.name) for f in fields(self)}
        merged.update(changes)

        surface = merged["surface"]
        if not isinstance(surface, str) or not surface:
            raise ConfigError(f"'surface' must be a surface name, got {surface!r}")
        params = merged["surface_params"] or {}
        if not isinstance(params, dict):
            raise ConfigError("'surface_params' must be a mapping")

        try:
            topology = Topology(merged["topology"]).value
        except ValueError:
            raise ConfigError(f"'topology' must be one of "
                              f"{[t.value for t in Topology]}, got {merged['topology']!r}") from None

        distance = merged["view_distance"]
        if distance is not None:
            if (isinstance(distance, bool) or not isinstance(distance, (int, float))
                    or not math.isfinite(distance) or distance < 0):
                raise ConfigError(f"'view_distance' must be a non-negative number, got {distance!r}")
            distance = float(distance)

        direction = _vector("view_direction", merged["view_direction"])
        up = _vector("view_up", merged["view_up"])
        if direction is None or up is None:
            raise ConfigError("'view_direction' and 'view_up' cannot be null")

        return replace(
            self,
            surface=surface,
            surface_params=dict(params),
            u_steps=resolve_steps(merged["u_steps"]),
            v_steps=resolve_steps(merged["v_steps"]),
            topology=topology,
            view_distance=distance,
            view_direction=direction,
            view_up=up,
            rotation_center=_vector("rotation_center", merged["rotation_center"]),
            width=_positive("width", merged["width"]),
            height=_positive("height", merged["height"]),
        )

    ## wiring to the core components

    def build_surface(self) -> ParametricSurface:
        try:
            return make_surface(self.surface, **self.surface_params)
        except TypeError as exc:
            raise ConfigError(f"bad surface_params for '{self.surface}': {exc}") from exc

    def build_rotator(self, callback=None) -> TrackballRotator:
        rotator = TrackballRotator(self.width, self.height, callback,
                                   self.view_distance, self.view_direction,
                                   self.view_up)
        rotator.set_rotation_center(self.rotation_center)
        return rotator

    def tessellate(self):
        return tessellate(self.build_surface(), self.u_steps, self.v_steps,
                          self.topology)


def user_config_path() -> Path:
    """Location of the per-user config file."""
    if sys.platform == "win32":
        config_base = Path(os.environ.get("APPDATA", "~")).expanduser()
    else:
        config_base = Path.home() / ".config"
    return config_base / "minsurf" / "config.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    return data if data is not None else {}


def load_config(path=None) -> ViewerConfig:
    """Load a ``ViewerConfig``.

    An explicit ``path`` (or ``MINSURF_CONFIG``) that does not exist is
    an error; a missing user config file is not.
    """
    if path is None:
        env_path = os.environ.get(MINSURF_CONFIG)
        if env_path:
            path = env_path

    if path is not None:
        path = Path(path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        candidate = user_config_path()
        if not candidate.is_file():
            logger.debug("no config file found, using defaults")
            return ViewerConfig()
        path = candidate

    logger.info("loading configuration from %s", path)
    return ViewerConfig.from_dict(_load_yaml(path))
