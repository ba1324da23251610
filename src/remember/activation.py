"""Registers the client script and stylesheet on rendered documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Output formats that render HTML and execute scripts.
SCRIPT_CAPABLE_FORMATS = frozenset({"html", "html4", "html5", "revealjs", "dashboard"})

DEPENDENCIES_KEY = "html-dependencies"


@dataclass(frozen=True, slots=True)
class HtmlDependency:
    name: str
    version: str
    scripts: tuple[str, ...] = ()
    stylesheets: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "scripts": list(self.scripts),
            "stylesheets": list(self.stylesheets),
        }


REMEMBER_DEPENDENCY = HtmlDependency(
    name="remember",
    version="1.0.0",
    scripts=("remember.js",),
    stylesheets=("remember.css",),
)


def base_format(output_format: str) -> str:
    """Reduce a format name to its base.

    Pandoc toggles are stripped (``html+smart-raw_tex`` -> ``html``) and
    extension formats resolve to the format they build on
    (``acm-html`` -> ``html``).
    """
    name = output_format.strip().lower().split("+", 1)[0]
    segments = name.split("-")
    for segment in segments:
        if segment in SCRIPT_CAPABLE_FORMATS:
            return segment
    return segments[0]


def supports_scripts(output_format: str) -> bool:
    return base_format(output_format) in SCRIPT_CAPABLE_FORMATS


def inject_dependencies(
    meta: dict[str, Any],
    output_format: str,
    *,
    dependency: HtmlDependency = REMEMBER_DEPENDENCY,
) -> dict[str, Any]:
    """Return ``meta`` with ``dependency`` registered for script-capable formats.

    Non-HTML formats get ``meta`` back unchanged. Registering twice keeps a
    single entry.
    """

    if not supports_scripts(output_format):
        return meta

    existing = list(meta.get(DEPENDENCIES_KEY, []))
    if any(isinstance(item, dict) and item.get("name") == dependency.name for item in existing):
        return meta

    logger.debug("Registering %s %s for %s", dependency.name, dependency.version, output_format)
    return {**meta, DEPENDENCIES_KEY: [*existing, dependency.as_dict()]}


@dataclass(slots=True)
class RevealPlugin:
    """Plugin descriptor handed to the slide framework's plugin list."""

    id: str = "remember"
    loaded: bool = False

    def init(self, deck: Any | None = None) -> None:
        # Initialisation itself happens in ``install``; this only registers.
        self.loaded = True
        logger.info("Remember plugin loaded for Reveal.js")


def reveal_plugin() -> RevealPlugin:
    return RevealPlugin()
