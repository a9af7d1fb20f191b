"""Schema helpers for the cropstage options file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_CROP_BOX_SIZE, OPTIONS_SCHEMA_ID

_SIZE = {
    "type": "object",
    "required": ["width", "height"],
    "properties": {
        "width": {"type": "number", "exclusiveMinimum": 0},
        "height": {"type": "number", "exclusiveMinimum": 0},
    },
    "additionalProperties": False,
}

OPTIONS_SCHEMA: dict[str, Any] = {
    "$id": "cropstage/options.schema.json",
    "type": "object",
    "required": ["schema", "stage", "crop"],
    "properties": {
        "schema": {"const": OPTIONS_SCHEMA_ID},
        "stage": _SIZE,
        "preview": _SIZE,
        "crop": {
            "type": "object",
            "properties": {
                "mode": {"type": "string", "enum": ["free", "ratio", "fixed"]},
                "ratio": {"type": ["number", "null"], "exclusiveMinimum": 0},
                "crop_width": {"type": ["integer", "null"], "minimum": 1},
                "crop_height": {"type": ["integer", "null"], "minimum": 1},
                "default_box_size": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
        "show_crop_mesh": {"type": "boolean"},
    },
    "additionalProperties": True,
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "schema": OPTIONS_SCHEMA_ID,
    "stage": {"width": 800, "height": 600},
    "preview": {"width": 300, "height": 300},
    "crop": {
        "mode": "free",
        "ratio": None,
        "crop_width": None,
        "crop_height": None,
        "default_box_size": DEFAULT_CROP_BOX_SIZE,
    },
    "show_crop_mesh": True,
}

_SECTIONS = ("stage", "preview", "crop")

_validator = Draft202012Validator(OPTIONS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_OPTIONS` and validate the result."""

    merged = deepcopy(DEFAULT_OPTIONS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_options(data: dict[str, Any]) -> None:
    """Validate *data* against the options schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_OPTIONS", "OPTIONS_SCHEMA", "merge_with_defaults", "validate_options"]
