"""Pytest configuration and shared fixtures."""

import json
import tempfile
from pathlib import Path

import pytest


def _write_json(path: Path, content: object) -> Path:
    """Write a JSON document, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_locales_dir(temp_dir: Path) -> Path:
    """Create a valid locales directory with two structurally identical locales."""
    root = temp_dir / "locales"

    _write_json(root / "en" / "shared.json", {
        "brand": {"name": "AI Coding Stack", "short": "acs"},
        "dict": {"ides": "IDEs", "clis": "CLIs"},
        "header": {
            "title": "@:shared.brand.name",
            "tagline": "@.upper:shared.brand.short tools",
        },
    })
    _write_json(root / "en" / "components.json", {
        "nav": {"ides": "@.capitalize:shared.dict.ides"},
    })
    _write_json(root / "en" / "pages" / "curated-collections.json", {
        "title": "Collections of @:shared.brand.name",
        "features": ["@:shared.dict.clis", "plain"],
        "count": 3,
    })

    _write_json(root / "de" / "shared.json", {
        "brand": {"name": "KI-Coding-Stack", "short": "kcs"},
        "dict": {"ides": "IDEs", "clis": "CLIs"},
        "header": {
            "title": "@:shared.brand.name",
            "tagline": "@.upper:shared.brand.short Werkzeuge",
        },
    })
    _write_json(root / "de" / "components.json", {
        "nav": {"ides": "@.lower:shared.dict.ides"},
    })
    _write_json(root / "de" / "pages" / "curated-collections.json", {
        "title": "Sammlungen von @:shared.brand.name",
        "features": ["@:shared.dict.clis", "einfach"],
        "count": 3,
    })

    # Ignored: underscore prefix and no JSON
    _write_json(root / "_archive" / "shared.json", {"old": "@:nowhere"})
    (root / "notes").mkdir()

    return root


@pytest.fixture
def broken_locales_dir(temp_dir: Path) -> Path:
    """Create a locales directory whose only locale has six reference problems."""
    root = temp_dir / "locales"

    _write_json(root / "en" / "shared.json", {
        "a": {"b": "hello", "tree": {"x": "y"}},
        "broken": "@:shared.a.missing and @:shared.nope",
        "typed": "@:shared.a.tree",
        "shout": "@.shout:shared.a.b",
        "loop1": "@:shared.loop2",
        "loop2": "@:shared.loop1",
        "fine": "@.upper:shared.a.b",
    })

    return root


@pytest.fixture
def sample_messages() -> dict:
    """Create an in-memory message tree."""
    return {
        "message": {
            "the_world": "the world",
            "dio": "DIO:",
            "linked": "@:message.dio @:message.the_world !!!!",
        },
        "a": {"b": "hello", "c": "Y"},
    }


@pytest.fixture
def write_json():
    """Return a helper that writes a JSON document to a path."""
    return _write_json
