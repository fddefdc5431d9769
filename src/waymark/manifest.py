"""Build manifest deserialization.

The site build emits a manifest describing every route, asset, and
inlined script. Loading it is a structural copy into frozen objects;
the only computation is rebuilding each route's URL generator from its
serialized segments.

Usage::

    manifest = load_manifest("dist/manifest.json")
    router = manifest.router()
    router.url_for("/blog/[post]", {"post": "hello"})  # -> "/blog/hello"
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from waymark.config import SiteConfig
from waymark.errors import ManifestError
from waymark.middleware import Middleware, noop_middleware
from waymark.routing.route import ROUTE_TYPES, RedirectConfig, RedirectRoute, RouteData, RoutePart
from waymark.routing.router import Router

logger = logging.getLogger("waymark.manifest")

# Call site of the serialized manifest inside a compiled ``manifest_*.mjs``
_MANIFEST_CALL = "deserializeManifest("


@dataclass(frozen=True, slots=True)
class ComponentMetadata:
    """Head propagation info for one component."""

    propagation: str
    contains_head: bool


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """One manifest route: build output file, page assets, and route data."""

    route_data: RouteData
    file: str = ""
    links: tuple[str, ...] = ()
    scripts: tuple[Any, ...] = ()
    styles: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Manifest:
    """A deserialized build manifest. Immutable after creation.

    Constructed once at process startup and passed explicitly to whatever
    needs route information.
    """

    config: SiteConfig
    routes: tuple[RouteInfo, ...]
    assets: frozenset[str] = frozenset()
    component_metadata: Mapping[str, ComponentMetadata] = field(default_factory=lambda: MappingProxyType({}))
    inlined_scripts: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    client_directives: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    entry_modules: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    server_island_name_map: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    renderers: tuple[Any, ...] = ()
    key: bytes = b""
    _router: Router = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_router", Router(self.route_data))

    @property
    def route_data(self) -> tuple[RouteData, ...]:
        """Route data of every route, in manifest order."""
        return tuple(info.route_data for info in self.routes)

    def router(self) -> Router:
        """Return the router over this manifest's routes, built once."""
        return self._router

    def middleware(self) -> Middleware:
        """Return the request middleware for this build.

        The build carries no user middleware, so this is the no-op
        pass-through.
        """
        return noop_middleware


def _require(raw: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return raw[key]
    except KeyError:
        msg = f"{where} is missing required key {key!r}"
        raise ManifestError(msg) from None


def _segments(raw_segments: Sequence[Sequence[Mapping[str, Any]]]) -> tuple[tuple[RoutePart, ...], ...]:
    return tuple(
        tuple(
            RoutePart(
                content=part["content"],
                dynamic=bool(part.get("dynamic", False)),
                spread=bool(part.get("spread", False)),
            )
            for part in segment
        )
        for segment in raw_segments
    )


def _redirect(raw: Any) -> str | RedirectConfig:
    if isinstance(raw, Mapping):
        return RedirectConfig(status=int(raw["status"]), destination=raw["destination"])
    return raw


def deserialize_route_data(raw: Mapping[str, Any]) -> RouteData:
    """Rebuild one route from its serialized form.

    Dispatches on ``type`` to the matching variant; nested redirect and
    fallback routes are deserialized recursively.
    """
    route = _require(raw, "route", "routeData")
    route_type = _require(raw, "type", f"route {route!r}")
    cls = ROUTE_TYPES.get(route_type)
    if cls is None:
        msg = f"route {route!r} has unknown type {route_type!r}"
        raise ManifestError(msg)

    try:
        pattern = re.compile(_require(raw, "pattern", f"route {route!r}"))
        segments = _segments(raw.get("segments", ()))
    except (re.error, KeyError, TypeError) as exc:
        msg = f"route {route!r} has a malformed pattern or segments: {exc}"
        raise ManifestError(msg) from exc

    fields: dict[str, Any] = {
        "route": route,
        "component": _require(raw, "component", f"route {route!r}"),
        "pattern": pattern,
        "segments": segments,
        "params": tuple(raw.get("params", ())),
        "pathname": raw.get("pathname") or None,
        "prerender": bool(raw.get("prerender", False)),
        "is_index": bool(raw.get("isIndex", False)),
        "origin": raw.get("origin", "project"),
        "trailing_slash": raw.get("_meta", {}).get("trailingSlash", "ignore"),
        "fallback_routes": tuple(deserialize_route_data(fb) for fb in raw.get("fallbackRoutes", ())),
    }
    if cls is RedirectRoute:
        fields["redirect"] = _redirect(_require(raw, "redirect", f"redirect route {route!r}"))
        redirect_route = raw.get("redirectRoute")
        fields["redirect_route"] = deserialize_route_data(redirect_route) if redirect_route else None

    return cls(**fields)


def decode_key(encoded: str) -> bytes:
    """Decode the manifest's base64 server key."""
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        msg = f"manifest key is not valid base64: {exc}"
        raise ManifestError(msg) from exc


def deserialize_manifest(raw: Mapping[str, Any]) -> Manifest:
    """Build a ``Manifest`` from its parsed JSON form."""
    routes: list[RouteInfo] = []
    for serialized in _require(raw, "routes", "manifest"):
        route_data = deserialize_route_data(_require(serialized, "routeData", "manifest route"))
        routes.append(
            RouteInfo(
                route_data=route_data,
                file=serialized.get("file", ""),
                links=tuple(serialized.get("links", ())),
                scripts=tuple(serialized.get("scripts", ())),
                styles=tuple(serialized.get("styles", ())),
            )
        )

    component_metadata = {
        name: ComponentMetadata(
            propagation=meta.get("propagation", "none"),
            contains_head=bool(meta.get("containsHead", False)),
        )
        for name, meta in raw.get("componentMetadata", ())
    }

    manifest = Manifest(
        config=SiteConfig.from_manifest(raw),
        routes=tuple(routes),
        assets=frozenset(raw.get("assets", ())),
        component_metadata=MappingProxyType(component_metadata),
        inlined_scripts=MappingProxyType(dict(raw.get("inlinedScripts", ()))),
        client_directives=MappingProxyType(dict(raw.get("clientDirectives", ()))),
        entry_modules=MappingProxyType(dict(raw.get("entryModules", {}))),
        server_island_name_map=MappingProxyType(dict(raw.get("serverIslandNameMap", ()))),
        renderers=tuple(raw.get("renderers", ())),
        key=decode_key(raw["key"]) if raw.get("key") else b"",
    )
    logger.debug(
        "Deserialized manifest: %d routes, %d assets",
        len(manifest.routes),
        len(manifest.assets),
    )
    return manifest


def extract_manifest_json(source: str) -> Any:
    """Parse the manifest literal out of a compiled ``manifest_*.mjs`` module.

    The module calls ``deserializeManifest({...})`` with the manifest as a
    JSON object literal; everything else in the module is ignored.
    """
    # The function definition comes first; the data call is the last occurrence.
    start = source.rfind(_MANIFEST_CALL)
    if start == -1:
        msg = f"no {_MANIFEST_CALL}...) call found in module source"
        raise ManifestError(msg)

    start += len(_MANIFEST_CALL)
    try:
        data, _ = json.JSONDecoder().raw_decode(source, start)
    except json.JSONDecodeError as exc:
        msg = f"manifest literal is not valid JSON: {exc}"
        raise ManifestError(msg) from exc
    return data


def load_manifest(path: str | Path) -> Manifest:
    """Load a manifest from a ``.json`` file or a compiled ``.mjs`` module."""
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"cannot read manifest: {exc.strerror}", path) from exc

    try:
        if path.suffix in (".mjs", ".js"):
            raw = extract_manifest_json(source)
        else:
            raw = json.loads(source)
        if not isinstance(raw, Mapping):
            msg = "manifest must be a JSON object"
            raise ManifestError(msg)
        manifest = deserialize_manifest(raw)
    except ManifestError as exc:
        raise ManifestError(str(exc), path) from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"invalid JSON: {exc}", path) from exc

    logger.debug("Loaded manifest from %s", path)
    return manifest
