"""Sitemap generation for a manifest's prerendered pages.

Static pages contribute their generated path. Dynamic pages contribute
one URL per parameter set supplied in *static_paths*, keyed by the
route declaration::

    urls = collect_sitemap_urls(manifest, {"/blog/[post]": [{"post": "hello"}]})
    write_sitemaps(manifest, "dist", {"/blog/[post]": [{"post": "hello"}]})

XML is rendered through kida with autoescaping, so ``&`` in a URL is
emitted as ``&amp;``.
"""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from functools import cache
from pathlib import Path

from kida import Environment

from waymark.errors import ConfigurationError
from waymark.manifest import Manifest
from waymark.routing.params import Params
from waymark.routing.route import RouteData

logger = logging.getLogger("waymark.sitemap")

type StaticPaths = Mapping[str, Sequence[Params]]

DEFAULT_ENTRY_LIMIT = 45000

# /404, /500, ... are error pages, never sitemap entries
_STATUS_PAGE = re.compile(r"^/?\d{3}/?$")

SITEMAP_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
{% for url in urls %}<url><loc>{{ url }}</loc></url>
{% end %}</urlset>
"""

SITEMAP_INDEX_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
{% for url in sitemaps %}<sitemap><loc>{{ url }}</loc></sitemap>
{% end %}</sitemapindex>
"""


@cache
def _environment() -> Environment:
    return Environment(autoescape=True)


def _is_sitemap_page(route: RouteData) -> bool:
    return (
        route.type == "page"
        and route.origin == "project"
        and route.prerender
        and not _STATUS_PAGE.match(route.route)
    )


def _apply_trailing_slash(path: str, policy: str) -> str:
    if path == "/":
        return path
    if policy == "always" and not path.endswith("/"):
        return path + "/"
    if policy == "never":
        return path.rstrip("/")
    return path


def collect_sitemap_urls(
    manifest: Manifest,
    static_paths: StaticPaths | None = None,
    *,
    site: str | None = None,
) -> list[str]:
    """Absolute URLs for every prerendered project page, in manifest order.

    Raises ``ConfigurationError`` if neither *site* nor the manifest
    configures a site URL.
    """
    config = manifest.config
    site = site or config.site
    if not site:
        msg = "Sitemap generation needs a site URL (manifest 'site' or the site argument)."
        raise ConfigurationError(msg)

    static_paths = static_paths or {}
    seen: set[str] = set()
    urls: list[str] = []

    for route in manifest.route_data:
        if not _is_sitemap_page(route):
            continue

        if route.is_dynamic:
            param_sets = static_paths.get(route.route, ())
            if not param_sets:
                logger.warning("Skipping dynamic route %s: no static paths given", route.route)
                continue
            paths = [route.generate(params) for params in param_sets]
        else:
            paths = [route.generate({})]

        for path in paths:
            path = _apply_trailing_slash(path, config.trailing_slash)
            url = site.rstrip("/") + config.join_base(path)
            if url not in seen:
                seen.add(url)
                urls.append(url)

    logger.debug("Collected %d sitemap URLs", len(urls))
    return urls


def render_sitemap(urls: Iterable[str]) -> str:
    """Render a ``<urlset>`` document."""
    template = _environment().from_string(SITEMAP_TEMPLATE)
    return template.render({"urls": list(urls)})


def render_sitemap_index(sitemap_urls: Iterable[str]) -> str:
    """Render a ``<sitemapindex>`` document pointing at sitemap files."""
    template = _environment().from_string(SITEMAP_INDEX_TEMPLATE)
    return template.render({"sitemaps": list(sitemap_urls)})


def write_sitemaps(
    manifest: Manifest,
    out_dir: str | Path,
    static_paths: StaticPaths | None = None,
    *,
    site: str | None = None,
    entry_limit: int = DEFAULT_ENTRY_LIMIT,
) -> list[Path]:
    """Write ``sitemap-N.xml`` chunks and ``sitemap-index.xml`` into *out_dir*.

    Returns the written paths, index last.
    """
    if entry_limit < 1:
        msg = f"entry_limit must be positive, got {entry_limit}"
        raise ConfigurationError(msg)

    urls = collect_sitemap_urls(manifest, static_paths, site=site)
    site_url = (site or manifest.config.site or "").rstrip("/")
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    chunks = [urls[i : i + entry_limit] for i in range(0, len(urls), entry_limit)] or [[]]
    written: list[Path] = []
    index_urls: list[str] = []
    for number, chunk in enumerate(chunks):
        name = f"sitemap-{number}.xml"
        target = out / name
        target.write_text(render_sitemap(chunk), encoding="utf-8")
        written.append(target)
        index_urls.append(site_url + manifest.config.join_base(name))

    index = out / "sitemap-index.xml"
    index.write_text(render_sitemap_index(index_urls), encoding="utf-8")
    written.append(index)
    logger.info("Wrote %d sitemap file(s) with %d URLs to %s", len(chunks), len(urls), out)
    return written
