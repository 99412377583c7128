"""Built-in property definitions, the targets of ``extend`` in property configs."""

from __future__ import annotations

from typing import Any


def _box(name: str, suffix: str = "", default: str = "0") -> dict[str, Any]:
    sides = ("top", "right", "bottom", "left")
    return {
        "property": name,
        "type": "composite",
        "properties": [
            {"property": f"{name}-{side}{suffix}", "default": default} for side in sides
        ],
    }


BUILTIN_PROPERTIES: dict[str, dict[str, Any]] = {
    "padding": _box("padding"),
    "margin": _box("margin"),
    "border-width": {
        "property": "border-width",
        "type": "composite",
        "properties": [
            {"property": f"border-{side}-width", "default": "medium"}
            for side in ("top", "right", "bottom", "left")
        ],
    },
    "border-radius": {
        "property": "border-radius",
        "type": "composite",
        "properties": [
            {"property": f"border-{corner}-radius", "default": "0"}
            for corner in ("top-left", "top-right", "bottom-right", "bottom-left")
        ],
    },
    "border": {
        "property": "border",
        "type": "composite",
        "properties": [
            {"property": "border-width", "default": "medium"},
            {"property": "border-style", "default": "none"},
            {"property": "border-color", "default": "currentcolor"},
        ],
    },
    "box-shadow": {
        "property": "box-shadow",
        "type": "stack",
        "properties": [
            {"property": "box-shadow-h", "default": "0"},
            {"property": "box-shadow-v", "default": "0"},
            {"property": "box-shadow-blur", "default": "0"},
            {"property": "box-shadow-spread", "default": "0"},
            {"property": "box-shadow-color", "default": "black"},
            {"property": "box-shadow-type", "default": ""},
        ],
    },
    "text-shadow": {
        "property": "text-shadow",
        "type": "stack",
        "properties": [
            {"property": "text-shadow-h", "default": "0"},
            {"property": "text-shadow-v", "default": "0"},
            {"property": "text-shadow-blur", "default": "0"},
            {"property": "text-shadow-color", "default": "black"},
        ],
    },
    "transition": {
        "property": "transition",
        "type": "stack",
        "properties": [
            {"property": "transition-property", "default": "all"},
            {"property": "transition-duration", "default": "0s"},
            {"property": "transition-timing-function", "default": "ease"},
        ],
    },
    "background": {
        "property": "background",
        "type": "stack",
        "detached": True,
        "properties": [
            {"property": "background-image", "default": "none"},
            {"property": "background-repeat", "default": "repeat"},
            {"property": "background-position", "default": "left top"},
            {"property": "background-attachment", "default": "scroll"},
            {"property": "background-size", "default": "auto"},
        ],
    },
}
