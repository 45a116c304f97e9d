"""
Configuration for the list pager.

``PagerConfig`` can be loaded from YAML files or constructed
programmatically.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_MARKER = "› "

CONFIG_FILENAME = "list-pager.yaml"


def default_config_paths() -> list[Path]:
    """Config file search paths, highest priority first."""
    return [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / ".config" / "list-pager" / "config.yaml",
    ]


@dataclass
class PagerConfig:
    """
    Display and input options for a :class:`~list_pager.pager.ListPager`.

    Example YAML:
        x: 2
        y: 1
        length: 15
        marker: "> "
        keybindings:
          up: ["up", "k"]
          down: ["down", "j"]
    """

    # Render origin
    x: int = 6
    y: int = 8

    # Backing surface size
    width: int = 100
    height: int = 200

    length: int = 10  # Page length
    marker: str = DEFAULT_MARKER  # Prefix of the selected row

    # Action name -> key descriptors, replacing the defaults per action
    keybindings: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("length", "width", "height"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        for name in ("x", "y"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PagerConfig:
        """
        Create config from a dictionary.

        Raises ValueError when *data* or its ``keybindings`` section is not
        a mapping, or an action is bound to something other than a string or
        list of strings.
        """
        if not isinstance(data, dict):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")

        raw_bindings = data.get("keybindings") or {}
        if not isinstance(raw_bindings, dict):
            raise ValueError(
                f"keybindings must be a mapping, got {type(raw_bindings).__name__}"
            )

        keybindings = {}
        for action, keys in raw_bindings.items():
            if isinstance(keys, str):
                keys = [keys]
            elif not isinstance(keys, list):
                raise ValueError(f"keybindings.{action} must be a string or list")
            keybindings[action] = [str(k) for k in keys]

        return cls(
            x=int(data.get("x", 6)),
            y=int(data.get("y", 8)),
            width=int(data.get("width", 100)),
            height=int(data.get("height", 200)),
            length=int(data.get("length", 10)),
            marker=str(data.get("marker", DEFAULT_MARKER)),
            keybindings=keybindings,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> PagerConfig:
        """Load config from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> PagerConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    @classmethod
    def discover(cls, path: Path | None = None) -> tuple[PagerConfig, Path | None]:
        """
        Load the first config file found.

        An explicit *path* must exist.  Otherwise :func:`default_config_paths`
        is searched and defaults are used when nothing is found.

        Returns the config and the path it was loaded from (``None`` for
        defaults).
        """
        if path is not None:
            return cls.from_yaml(path), path
        for candidate in default_config_paths():
            if candidate.is_file():
                return cls.from_yaml(candidate), candidate
        return cls(), None

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "length": self.length,
            "marker": self.marker,
            "keybindings": {k: list(v) for k, v in self.keybindings.items()},
        }
