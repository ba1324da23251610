import logging

import pytest

from remember.activation import (
    DEPENDENCIES_KEY,
    REMEMBER_DEPENDENCY,
    inject_dependencies,
    reveal_plugin,
    supports_scripts,
)


@pytest.mark.parametrize(
    "output_format",
    ["html", "revealjs", "html5+smart", "HTML", "html-smart", "acm-html", "mycompany-revealjs"],
)
def test_script_capable_formats(output_format: str) -> None:
    assert supports_scripts(output_format)


@pytest.mark.parametrize("output_format", ["pdf", "docx", "gfm", "epub", "typst", "acm-pdf"])
def test_non_html_formats_are_skipped(output_format: str) -> None:
    meta = {"title": "Notes"}

    assert inject_dependencies(meta, output_format) is meta


def test_dependency_registered_once() -> None:
    meta = {"title": "Notes", DEPENDENCIES_KEY: [{"name": "other", "version": "2"}]}

    once = inject_dependencies(meta, "html")
    twice = inject_dependencies(once, "html")

    assert twice is once
    assert once[DEPENDENCIES_KEY] == [
        {"name": "other", "version": "2"},
        {
            "name": "remember",
            "version": "1.0.0",
            "scripts": ["remember.js"],
            "stylesheets": ["remember.css"],
        },
    ]
    assert meta[DEPENDENCIES_KEY] == [{"name": "other", "version": "2"}]
    assert REMEMBER_DEPENDENCY.version == "1.0.0"


def test_reveal_plugin_descriptor(caplog) -> None:
    plugin = reveal_plugin()

    with caplog.at_level(logging.INFO):
        plugin.init()

    assert plugin.id == "remember"
    assert plugin.loaded
    assert "Remember plugin loaded" in caplog.text


def test_extension_html_format_receives_dependency() -> None:
    meta = inject_dependencies({}, "acm-html")

    assert meta[DEPENDENCIES_KEY] == [REMEMBER_DEPENDENCY.as_dict()]
