"""Waymark — route manifests, URL generators, and sitemaps for built sites.

Loads the route manifest a site build emits, rebuilds each route's URL
generator from its serialized path segments, and matches request paths
back to routes.

Basic usage::

    from waymark import load_manifest

    manifest = load_manifest("dist/manifest.json")
    router = manifest.router()

    router.url_for("/blog/[post]", {"post": "hello"})  # "/blog/hello"
    router.match("/blog/hello").params                  # {"post": "hello"}
"""

import importlib

__version__ = "0.1.0"

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "waymark.errors",
    "Manifest": "waymark.manifest",
    "ManifestError": "waymark.errors",
    "Middleware": "waymark.middleware.protocol",
    "MissingParameterError": "waymark.errors",
    "Next": "waymark.middleware.protocol",
    "NotFound": "waymark.errors",
    "Request": "waymark.http",
    "Response": "waymark.http",
    "Router": "waymark.routing.router",
    "SiteConfig": "waymark.config",
    "WaymarkError": "waymark.errors",
    "load_manifest": "waymark.manifest",
    "route_generator": "waymark.routing.generator",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waymark`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
