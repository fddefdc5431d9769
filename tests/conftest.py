"""Shared fixtures: a serialized manifest shaped like a real site build."""

import copy
from typing import Any

import pytest


def _route(
    route: str,
    segments: list[list[dict[str, Any]]],
    pattern: str,
    *,
    type: str = "page",
    component: str = "",
    params: list[str] | None = None,
    prerender: bool = True,
    origin: str = "project",
    **extra: Any,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "route": route,
        "isIndex": route == "/",
        "type": type,
        "pattern": pattern,
        "segments": segments,
        "params": params or [],
        "component": component or f"src/pages{route}.astro",
        "prerender": prerender,
        "fallbackRoutes": [],
        "origin": origin,
        "_meta": {"trailingSlash": "ignore"},
    }
    if not data["params"]:
        data["pathname"] = route
    data.update(extra)
    return {"file": "", "links": [], "scripts": [], "styles": [], "routeData": data}


def _lit(content: str) -> dict[str, Any]:
    return {"content": content, "dynamic": False, "spread": False}


def _dyn(content: str) -> dict[str, Any]:
    return {"content": content, "dynamic": True, "spread": False}


RAW_MANIFEST: dict[str, Any] = {
    "adapterName": "@astrojs/netlify",
    "routes": [
        _route(
            "/_server-islands/[name]",
            [[_lit("_server-islands")], [_dyn("name")]],
            r"^\/_server-islands\/([^/]+?)\/?$",
            component="_server-islands.astro",
            params=["name"],
            prerender=False,
            origin="internal",
        ),
        _route("/404", [[_lit("404")]], r"^\/404\/?$"),
        _route("/blog", [[_lit("blog")]], r"^\/blog\/?$"),
        _route(
            "/blog/[post]",
            [[_lit("blog")], [_dyn("post")]],
            r"^\/blog\/([^/]+?)\/?$",
            params=["post"],
        ),
        _route(
            "/pagefind/pagefind.js",
            [[_lit("pagefind")], [_lit("pagefind.js")]],
            r"^\/pagefind\/pagefind\.js\/?$",
            type="endpoint",
            component="src/pages/pagefind/pagefind.js.ts",
        ),
        _route("/projects", [[_lit("projects")]], r"^\/projects\/?$"),
        _route(
            "/projects/[project]",
            [[_lit("projects")], [_dyn("project")]],
            r"^\/projects\/([^/]+?)\/?$",
            params=["project"],
        ),
        _route(
            "/docs/[...slug]",
            [[_lit("docs")], [{"content": "...slug", "dynamic": True, "spread": True}]],
            r"^\/docs(?:\/(.*?))?\/?$",
            params=["...slug"],
        ),
        _route(
            "/old-blog/[post]",
            [[_lit("old-blog")], [_dyn("post")]],
            r"^\/old-blog\/([^/]+?)\/?$",
            type="redirect",
            component="/old-blog/[post]",
            params=["post"],
            prerender=False,
            redirect="/blog/[post]",
        ),
        _route(
            "/about-me",
            [[_lit("about-me")]],
            r"^\/about-me\/?$",
            type="redirect",
            component="/about-me",
            prerender=False,
            redirect={"status": 302, "destination": "/"},
        ),
        _route("/", [], r"^\/$", component="src/pages/index.astro"),
        _route(
            "/_image",
            [[_lit("_image")]],
            r"^\/_image\/?$",
            type="endpoint",
            component="node_modules/astro/dist/assets/endpoint/generic.js",
            prerender=False,
            origin="internal",
        ),
    ],
    "site": "https://example.com",
    "base": "/",
    "trailingSlash": "ignore",
    "compressHTML": True,
    "componentMetadata": [
        ["src/pages/blog.astro", {"propagation": "in-tree", "containsHead": True}],
        ["src/pages/404.astro", {"propagation": "none", "containsHead": True}],
    ],
    "renderers": [],
    "clientDirectives": [["idle", "(()=>{})();"], ["load", "(()=>{})();"]],
    "entryModules": {"\u0000noop-middleware": "_noop-middleware.mjs"},
    "inlinedScripts": [["src/pages/blog.astro?astro&type=script", "console.log(1)"]],
    "assets": ["/favicon.svg", "/404.html", "/blog/index.html", "/favicon.svg"],
    "buildFormat": "directory",
    "checkOrigin": True,
    "serverIslandNameMap": [],
    "key": "FmOaBlp8F1MfxR6rmx7zEnwssPUTedp+nm7mSgHAJAw=",
}


@pytest.fixture
def raw_manifest() -> dict[str, Any]:
    """A fresh copy of the serialized manifest, safe to mutate."""
    return copy.deepcopy(RAW_MANIFEST)


@pytest.fixture
def manifest(raw_manifest: dict[str, Any]):
    from waymark.manifest import deserialize_manifest

    return deserialize_manifest(raw_manifest)
