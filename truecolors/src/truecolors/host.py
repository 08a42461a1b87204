"""Description of the host graphics API that the raw functions wrap.

The host is reached only through the entry points listed in the binding
tables below. ``graphics`` is any namespace object (module, instance or
``SimpleNamespace``) holding module-level functions; the other surfaces are
classes whose instance methods are wrapped.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Protocol, Sequence, Tuple, Type

# attribute holding the RawColorApi installed on a surface object
STATE_ATTR = "__truecolors__"

# (original name, raw name) per surface
GRAPHICS_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("clear", "raw_clear"),
    ("get_color", "get_raw_color"),
    ("set_color", "set_raw_color"),
    ("get_background_color", "get_raw_background_color"),
    ("set_background_color", "set_raw_background_color"),
    ("get_color_mask", "get_raw_color_mask"),
    ("set_color_mask", "set_raw_color_mask"),
)
IMAGE_DATA_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("get_pixel", "get_raw_pixel"),
    ("set_pixel", "set_raw_pixel"),
    ("map_pixel", "map_raw_pixel"),
)
PARTICLE_SYSTEM_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("get_colors", "get_raw_colors"),
    ("set_colors", "set_raw_colors"),
)
SPRITE_BATCH_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("get_color", "get_raw_color"),
    ("set_color", "set_raw_color"),
)
SHADER_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("send_color", "send_raw_color"),
)

SURFACE_BINDINGS: Mapping[str, Tuple[Tuple[str, str], ...]] = MappingProxyType(
    {
        "graphics": GRAPHICS_BINDINGS,
        "image_data": IMAGE_DATA_BINDINGS,
        "particle_system": PARTICLE_SYSTEM_BINDINGS,
        "sprite_batch": SPRITE_BATCH_BINDINGS,
        "shader": SHADER_BINDINGS,
    }
)


class Graphics(Protocol):
    def clear(self, *args: Any) -> Any: ...
    def get_color(self) -> Sequence[float]: ...
    def set_color(self, *color: Any) -> Any: ...
    def get_background_color(self) -> Sequence[float]: ...
    def set_background_color(self, *color: Any) -> Any: ...
    def get_color_mask(self) -> Sequence[float]: ...
    def set_color_mask(self, *mask: Any) -> Any: ...


class ImageData(Protocol):
    def get_pixel(self, x: int, y: int) -> Sequence[float]: ...
    def set_pixel(self, x: int, y: int, *color: Any) -> Any: ...
    def map_pixel(self, fn: Callable[..., Sequence[float]], *region: int) -> Any: ...


class ParticleSystem(Protocol):
    def get_colors(self) -> Sequence[Sequence[float]]: ...
    def set_colors(self, *colors: Any) -> Any: ...


class SpriteBatch(Protocol):
    def get_color(self) -> Optional[Sequence[float]]: ...
    def set_color(self, *color: Any) -> Any: ...


class Shader(Protocol):
    def send_color(self, name: str, *colors: Sequence[float]) -> Any: ...


@dataclass
class HostApi:
    """The host surfaces to wrap. Surfaces left as ``None`` are skipped."""

    graphics: Optional[Graphics] = None
    image_data: Optional[Type[ImageData]] = None
    particle_system: Optional[Type[ParticleSystem]] = None
    sprite_batch: Optional[Type[SpriteBatch]] = None
    shader: Optional[Type[Shader]] = None

    def surfaces(self) -> Iterator[Tuple[str, Any]]:
        """Yield ``(surface name, target object)`` for every present surface."""

        for name in SURFACE_BINDINGS:
            target = getattr(self, name)
            if target is not None:
                yield name, target


def owned_api(target: Any) -> Any:
    """Return the facade installed on ``target`` itself, ignoring base classes."""

    return vars(target).get(STATE_ATTR)


def _resolve_original(surface: str, target: Any, name: str) -> Callable[..., Any]:
    # A base class patched earlier holds raw wrappers under the original
    # names; take the host function its facade captured instead.
    owners = target.__mro__ if isinstance(target, type) else (target,)
    for owner in owners:
        if name not in vars(owner):
            continue
        api = owned_api(owner)
        if api is not None and api.patched and surface in api.originals.functions:
            return api.originals.get(surface, name)
        break
    return getattr(target, name)


@dataclass(frozen=True)
class OriginalFunctions:
    """Host functions captured before any name is rebound.

    Raw wrappers only ever call these references, so rebinding the host's
    names afterwards cannot make a wrapper call itself.
    """

    functions: Mapping[str, Mapping[str, Callable[..., Any]]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def capture(cls, host: HostApi) -> "OriginalFunctions":
        captured: Dict[str, Mapping[str, Callable[..., Any]]] = {}
        for surface, target in host.surfaces():
            captured[surface] = MappingProxyType(
                {
                    original: _resolve_original(surface, target, original)
                    for original, _raw in SURFACE_BINDINGS[surface]
                }
            )
        return cls(MappingProxyType(captured))

    def surfaces(self) -> Iterator[str]:
        return iter(self.functions)

    def get(self, surface: str, name: str) -> Callable[..., Any]:
        try:
            return self.functions[surface][name]
        except KeyError as exc:
            raise KeyError(f"no captured host function: {surface}.{name}") from exc
