"""Install the raw functions on a host and optionally patch its original names."""
from __future__ import annotations

import warnings
from types import MappingProxyType, SimpleNamespace
from typing import Any, Callable, Dict, Iterator, Mapping, Tuple

from .host import STATE_ATTR, SURFACE_BINDINGS, HostApi, OriginalFunctions, owned_api
from .raw import RawFunctions, build_raw_functions


class RawColorApi:
    """Facade over a host that speaks the [0-255] convention.

    Raw names are available directly (``api.raw_clear(...)``,
    ``api.get_raw_pixel(image, x, y)``) and per surface
    (``api.sprite_batch.get_raw_color(batch)``). A name that exists on more
    than one surface resolves to the graphics one.
    """

    def __init__(self, host: HostApi, originals: OriginalFunctions, functions: Dict[str, RawFunctions]):
        self.host = host
        self.originals = originals
        self._functions: Mapping[str, RawFunctions] = MappingProxyType(functions)
        self._flat: Dict[str, Callable[..., Any]] = {}
        for surface in SURFACE_BINDINGS:
            for raw_name, function in functions.get(surface, {}).items():
                self._flat.setdefault(raw_name, function)
            if surface in functions:
                setattr(self, surface, SimpleNamespace(**functions[surface]))
        self.patched = False

    def __getattr__(self, name: str) -> Callable[..., Any]:
        flat = self.__dict__.get("_flat", {})
        if name not in flat:
            raise AttributeError(name)
        return flat[name]

    def __dir__(self) -> list:
        return sorted(set(super().__dir__()) | set(self._flat))

    def functions(self, surface: str) -> RawFunctions:
        return dict(self._functions[surface])

    def original(self, surface: str, name: str) -> Callable[..., Any]:
        """Return the host function captured before installation."""

        return self.originals.get(surface, name)

    def bindings(self) -> Iterator[Tuple[str, str, str]]:
        """Yield ``(surface, original name, raw name)`` for every wrapped function."""

        for surface in self._functions:
            for original, raw in SURFACE_BINDINGS[surface]:
                yield surface, original, raw


def _installed_api(host: HostApi) -> RawColorApi | None:
    """Return the facade already installed for exactly this set of surfaces.

    Raises ``ValueError`` when some surfaces belong to another facade, so a
    mixed host is rejected before anything is rebound.
    """

    present = dict(host.surfaces())
    apis = []
    for target in present.values():
        api = owned_api(target)
        if api is not None and all(api is not seen for seen in apis):
            apis.append(api)
    if not apis:
        return None
    if len(apis) == 1:
        api = apis[0]
        covered = dict(api.host.surfaces())
        if covered.keys() == present.keys() and all(
            covered[name] is target for name, target in present.items()
        ):
            return api
    names = ", ".join(name for name, target in present.items() if owned_api(target) is not None)
    raise ValueError(
        f"surfaces already installed with a different host: {names}; "
        "install them together or not at all"
    )


def install(host: HostApi) -> RawColorApi:
    """Add the raw functions to every host surface and return the facade.

    The host's original names are left untouched. Installing an already
    installed host returns the existing facade. A subclass of an installed
    or patched class gets its own facade built over the true host functions.
    """

    api = _installed_api(host)
    if api is not None:
        return api

    originals = OriginalFunctions.capture(host)
    functions = build_raw_functions(originals)
    api = RawColorApi(host, originals, functions)
    for surface, target in host.surfaces():
        for raw_name, function in functions[surface].items():
            setattr(target, raw_name, function)
        setattr(target, STATE_ATTR, api)
    return api


def apply_patch(host: HostApi) -> RawColorApi:
    """Rebind the host's original names to their [0-255] counterparts.

    This cannot be undone. Patching a host twice leaves it as it is.
    """

    api = install(host)
    if api.patched:
        warnings.warn(
            "host is already patched; apply_patch() ignored",
            RuntimeWarning,
            stacklevel=2,
        )
        return api

    for surface, target in host.surfaces():
        functions = api.functions(surface)
        for original, raw in SURFACE_BINDINGS[surface]:
            setattr(target, original, functions[raw])
    api.patched = True
    return api


def is_patched(host: HostApi) -> bool:
    targets = [target for _surface, target in host.surfaces()]
    return bool(targets) and all(
        owned_api(target) is not None and owned_api(target).patched for target in targets
    )
