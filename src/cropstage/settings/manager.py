"""Options file management with validation and change notifications."""

from __future__ import annotations

import json
import os
import sys
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from ..config import OPTIONS_DIR_NAME, OPTIONS_FILE_NAME, OPTIONS_PATH_ENV
from ..core.geometry import StageBounds
from ..crop.sizing import SizingMode, sizing_mode_from_mapping
from ..errors import SettingsLoadError, SettingsValidationError
from ..utils.jsonio import read_json, write_json
from ..utils.signal import Signal
from .schema import DEFAULT_OPTIONS, merge_with_defaults


def _user_config_dir() -> Path:
    if os.name == "nt":
        return Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def default_settings_path() -> Path:
    """Return where the options file lives.

    ``$CROPSTAGE_OPTIONS`` names the file outright; otherwise it is
    ``cropstage/cropstage.json`` under the per-user configuration directory.
    """

    override = os.environ.get(OPTIONS_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return _user_config_dir() / OPTIONS_DIR_NAME / OPTIONS_FILE_NAME


@dataclass(frozen=True)
class SettingChange:
    """Payload of ``SettingsManager.settingsChanged``."""

    key: str
    value: Any


class SettingsManager:
    """Load, validate and persist crop options."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_OPTIONS)
        self.settingsChanged: Signal[SettingChange] = Signal("settingsChanged")

    @property
    def path(self) -> Path:
        return self._path or default_settings_path()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self, *, write_defaults: bool = True) -> None:
        """Load the options JSON from disk.

        Missing files fall back to the defaults.  With *write_defaults* the
        merged document is written back, creating the file when needed.
        """

        path = self.path
        self._path = path
        if path.exists():
            try:
                payload = read_json(path)
            except (OSError, json.JSONDecodeError) as exc:
                raise SettingsLoadError(f"Could not read {path}: {exc}") from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"{path} does not contain a JSON object")
        else:
            payload = None
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        if write_defaults:
            self._write()

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target = self._data
        parts = key.split(".")
        for index, part in enumerate(parts):
            if not isinstance(target, dict) or part not in target:
                return default
            value = target[part]
            if index == len(parts) - 1:
                return value
            target = value
        return default

    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change.

        Invalid values are rejected with :class:`SettingsValidationError` and
        leave the current options untouched.
        """

        if isinstance(value, Path):
            value = str(value)
        candidate = deepcopy(self._data)
        parts = key.split(".")
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            self._data = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()
        self.settingsChanged.emit(SettingChange(key, value))

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------
    def stage_bounds(self) -> StageBounds:
        return StageBounds(float(self.get("stage.width")), float(self.get("stage.height")))

    def preview_size(self) -> tuple[float, float]:
        return (float(self.get("preview.width")), float(self.get("preview.height")))

    def sizing_mode(self) -> SizingMode:
        """Build the sizing mode described by the ``crop`` section."""

        return sizing_mode_from_mapping(self.get("crop"))

    def default_box_size(self) -> float:
        return float(self.get("crop.default_box_size"))

    def show_crop_mesh(self) -> bool:
        return bool(self.get("show_crop_mesh"))

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _write(self) -> None:
        write_json(self.path, self._data)


__all__ = ["SettingChange", "SettingsManager", "default_settings_path"]
