"""Replay recorded pointer event scripts against a :class:`CropSession`.

A replay script is a JSON document::

    {
      "stage": {"width": 400, "height": 300},
      "crop": {"mode": "ratio", "ratio": 2},
      "image": {"width": 1600, "height": 1200},
      "events": [
        {"type": "down", "handle": "bottomRight", "x": 300, "y": 250},
        {"type": "move", "x": 340, "y": 270},
        {"type": "up"}
      ]
    }

``image`` may instead be ``{"path": "photo.jpg"}``; relative paths are
resolved against the script's directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .core.geometry import Point, StageBounds
from .crop.sizing import sizing_mode_from_mapping
from .crop.utils import CropHandle
from .errors import ReplayScriptError
from .session import CropSession
from .utils.jsonio import read_json

_LOGGER = logging.getLogger(__name__)

_POSITION = {
    "x": {"type": "number"},
    "y": {"type": "number"},
}

REPLAY_SCHEMA: dict[str, Any] = {
    "$id": "cropstage/replay.schema.json",
    "type": "object",
    "required": ["stage", "events"],
    "properties": {
        "stage": {
            "type": "object",
            "required": ["width", "height"],
            "properties": {
                "width": {"type": "number", "exclusiveMinimum": 0},
                "height": {"type": "number", "exclusiveMinimum": 0},
            },
        },
        "crop": {"type": "object"},
        "preferred_size": {"type": "number", "exclusiveMinimum": 0},
        "image": {
            "oneOf": [
                {
                    "type": "object",
                    "required": ["width", "height"],
                    "properties": {
                        "width": {"type": "integer", "minimum": 1},
                        "height": {"type": "integer", "minimum": 1},
                    },
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "required": ["path"],
                    "properties": {"path": {"type": "string"}},
                    "additionalProperties": False,
                },
            ]
        },
        "events": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type"],
                "oneOf": [
                    {
                        "properties": {
                            "type": {"const": "down"},
                            "handle": {"enum": [handle.value for handle in CropHandle]},
                            **_POSITION,
                        },
                        "required": ["handle", "x", "y"],
                    },
                    {
                        "properties": {"type": {"const": "move"}, **_POSITION},
                        "required": ["x", "y"],
                    },
                    {"properties": {"type": {"enum": ["up", "up_outside", "leave"]}}},
                    {
                        "properties": {"type": {"const": "wheel"}, "delta_y": {"type": "number"}},
                        "required": ["delta_y"],
                    },
                    {
                        "properties": {"type": {"const": "mode"}, "crop": {"type": "object"}},
                        "required": ["crop"],
                    },
                ],
            },
        },
    },
}

_validator = Draft202012Validator(REPLAY_SCHEMA)


def validate_script(script: Any) -> None:
    """Raise :class:`ReplayScriptError` when *script* does not match the schema."""

    errors = sorted(_validator.iter_errors(script), key=lambda err: list(err.path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise ReplayScriptError(f"Invalid replay script at {location}: {first.message}")


def load_script(path: Path) -> dict[str, Any]:
    """Read and validate the replay script stored at *path*."""

    try:
        script = read_json(path)
    except (OSError, json.JSONDecodeError) as exc:
        raise ReplayScriptError(f"Could not read replay script {path}: {exc}") from exc
    validate_script(script)
    return script


def run_script(script: dict[str, Any], base_dir: Path | None = None) -> CropSession:
    """Build a session from *script*, replay its events and return the session."""

    stage = StageBounds(float(script["stage"]["width"]), float(script["stage"]["height"]))
    kwargs: dict[str, Any] = {"mode": sizing_mode_from_mapping(script.get("crop"))}
    if "preferred_size" in script:
        kwargs["preferred_size"] = float(script["preferred_size"])
    session = CropSession(stage, **kwargs)

    image = script.get("image")
    if image is not None:
        if "path" in image:
            image_path = Path(image["path"])
            if base_dir is not None and not image_path.is_absolute():
                image_path = base_dir / image_path
            session.load_image(image_path)
        else:
            session.set_image(int(image["width"]), int(image["height"]))

    for index, event in enumerate(script["events"]):
        kind = event["type"]
        _LOGGER.debug("Replaying event %d: %s", index, kind)
        if kind == "down":
            session.on_pointer_down(event["handle"], Point(event["x"], event["y"]))
        elif kind == "move":
            session.on_pointer_move(Point(event["x"], event["y"]))
        elif kind == "up":
            session.on_pointer_up()
        elif kind == "up_outside":
            session.on_pointer_up_outside()
        elif kind == "leave":
            session.on_pointer_leave()
        elif kind == "wheel":
            session.on_wheel(float(event["delta_y"]))
        elif kind == "mode":
            session.set_sizing_mode(sizing_mode_from_mapping(event["crop"]))
    return session


__all__ = ["REPLAY_SCHEMA", "load_script", "run_script", "validate_script"]
