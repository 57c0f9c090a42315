"""Three-point lighting rig with named presets."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol

from rudemesh.geometry import Vec3

Color = tuple[float, float, float, float]
ChangeCallback = Callable[[], None]


class LightingTarget(Protocol):
    """Anything that accepts a directional light and a viewer position."""

    def set_lighting(self, direction: Vec3, color: Color) -> None: ...

    def set_view_position(self, position: Vec3) -> None: ...


class LightingPreset(enum.Enum):
    """Named lighting setups."""

    STUDIO = "studio"
    MAYA = "maya"
    BLENDER = "blender"
    OUTDOOR = "outdoor"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Light:
    """A directional light: unit direction, RGBA colour and intensity."""

    direction: Vec3
    color: Color
    intensity: float


@dataclass(frozen=True)
class _Rig:
    key: Light
    fill: Light
    rim: Light
    ambient_color: Color
    ambient_intensity: float


def _light(direction: tuple[float, float, float], color: Color, intensity: float) -> Light:
    return Light(Vec3(*direction).normalized(), color, intensity)


_PRESETS: dict[LightingPreset, _Rig] = {
    LightingPreset.STUDIO: _Rig(
        key=_light((-0.4, -0.8, -0.6), (0.9, 0.9, 1.0, 1.0), 1.0),
        fill=_light((0.6, -0.3, 0.8), (0.8, 0.85, 1.0, 1.0), 0.4),
        rim=_light((0.2, 0.8, -0.9), (1.0, 0.95, 0.9, 1.0), 0.3),
        ambient_color=(0.2, 0.22, 0.25, 1.0),
        ambient_intensity=0.2,
    ),
    LightingPreset.MAYA: _Rig(
        key=_light((-0.3, -0.7, -0.5), (1.0, 0.98, 0.95, 1.0), 0.8),
        fill=_light((0.5, -0.4, 0.7), (0.9, 0.9, 1.0, 1.0), 0.5),
        rim=_light((0.1, 0.6, -0.8), (1.0, 0.9, 0.8, 1.0), 0.25),
        ambient_color=(0.25, 0.25, 0.28, 1.0),
        ambient_intensity=0.25,
    ),
    LightingPreset.BLENDER: _Rig(
        key=_light((-0.35, -0.75, -0.55), (1.0, 1.0, 1.0, 1.0), 0.9),
        fill=_light((0.7, -0.2, 0.6), (0.95, 0.95, 1.0, 1.0), 0.3),
        rim=_light((0.3, 0.7, -0.7), (1.0, 1.0, 0.95, 1.0), 0.2),
        ambient_color=(0.2, 0.2, 0.2, 1.0),
        ambient_intensity=0.2,
    ),
    LightingPreset.OUTDOOR: _Rig(
        key=_light((-0.2, -0.9, -0.4), (1.0, 0.95, 0.8, 1.0), 1.2),
        fill=_light((0.3, -0.1, 0.9), (0.7, 0.8, 1.0, 1.0), 0.6),
        rim=_light((0.5, 0.5, -0.7), (0.9, 0.85, 0.7, 1.0), 0.35),
        ambient_color=(0.3, 0.35, 0.4, 1.0),
        ambient_intensity=0.3,
    ),
}


def _scaled(light: Light) -> Color:
    r, g, b, a = light.color
    k = light.intensity
    return (r * k, g * k, b * k, a * k)


class LightingSystem:
    """Key, fill and rim lights plus ambient light, switchable between presets."""

    def __init__(self) -> None:
        self._preset = LightingPreset.STUDIO
        self._callbacks: list[ChangeCallback] = []
        self.shadows_enabled = False
        self._load(_PRESETS[LightingPreset.STUDIO])

    def _load(self, rig: _Rig) -> None:
        self.key_light = rig.key
        self.fill_light = rig.fill
        self.rim_light = rig.rim
        self.ambient_color = rig.ambient_color
        self.ambient_intensity = rig.ambient_intensity

    def _changed(self) -> None:
        for callback in self._callbacks:
            callback()

    @property
    def preset(self) -> LightingPreset:
        """The preset currently in effect; CUSTOM once any light is set by hand."""
        return self._preset

    def on_change(self, callback: ChangeCallback) -> None:
        """Register a callback called whenever the lighting changes."""
        self._callbacks.append(callback)

    def set_preset(self, preset: LightingPreset) -> None:
        """Switch to a preset; CUSTOM keeps the current lights."""
        if preset is self._preset:
            return
        self._preset = preset
        rig = _PRESETS.get(preset)
        if rig is not None:
            self._load(rig)
        self._changed()

    def _set_custom(self) -> None:
        self._preset = LightingPreset.CUSTOM
        self._changed()

    def set_key_light(self, direction: Vec3, color: Color, intensity: float = 1.0) -> None:
        """Set the primary light."""
        self.key_light = Light(direction.normalized(), tuple(color), intensity)
        self._set_custom()

    def set_fill_light(self, direction: Vec3, color: Color, intensity: float = 0.5) -> None:
        """Set the secondary, softer light."""
        self.fill_light = Light(direction.normalized(), tuple(color), intensity)
        self._set_custom()

    def set_rim_light(self, direction: Vec3, color: Color, intensity: float = 0.3) -> None:
        """Set the back light used for separation."""
        self.rim_light = Light(direction.normalized(), tuple(color), intensity)
        self._set_custom()

    def set_ambient_light(self, color: Color, intensity: float = 0.2) -> None:
        """Set the ambient environment light."""
        self.ambient_color = tuple(color)
        self.ambient_intensity = intensity
        self._set_custom()

    def apply_lighting(self, renderer: Optional[LightingTarget], camera_position: Vec3) -> None:
        """Send the key light and the camera position to a renderer."""
        if renderer is None:
            raise ValueError("no renderer to apply lighting to")
        renderer.set_lighting(self.key_light.direction, _scaled(self.key_light))
        renderer.set_view_position(camera_position)

    def update_uniforms(self, renderer: Optional[LightingTarget]) -> None:
        """Send only the key light to a renderer; a missing renderer is ignored."""
        if renderer is None:
            return
        renderer.set_lighting(self.key_light.direction, _scaled(self.key_light))

    def __repr__(self) -> str:
        return f"LightingSystem(preset={self._preset.name})"


__all__ = ["Light", "LightingPreset", "LightingSystem", "LightingTarget", "replace"]