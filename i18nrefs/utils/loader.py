"""Load per-locale JSON content directories into message trees.

Expected layout::

    locales/
        en/
            shared.json            -> messages["shared"]
            components.json        -> messages["components"]
            model-providers.json   -> messages["model-providers"]
            pages/
                home.json          -> messages["pages"]["home"]
                curated-collections.json -> messages["pages"]["curatedCollections"]
        de/
            ...

Root file stems are used as-is; only files under ``pages/`` are camelCased.

Directories starting with ``_`` or ``.`` (e.g. ``_archive``) are ignored.
"""

import json
from pathlib import Path

from i18nrefs.logging import logger
from i18nrefs.models.messages import LocaleMessages, MessageTree
from i18nrefs.utils.cache import JsonFileCache
from i18nrefs.utils.tree import iter_strings, to_camel_case

PAGES_DIR = "pages"


class LocaleLoadError(Exception):
    """Raised when a locale directory or one of its files cannot be loaded."""

    def __init__(self, message: str, file: str | None = None):
        super().__init__(message)
        self.file = file


def _json_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".json")


def _is_locale_dir(path: Path) -> bool:
    if not path.is_dir() or path.name.startswith(("_", ".")):
        return False
    return bool(_json_files(path) or _json_files(path / PAGES_DIR))


def discover_locales(root: Path | str) -> list[str]:
    """List locale codes found under ``root``, sorted.

    Raises:
        LocaleLoadError: If ``root`` is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise LocaleLoadError(f"Locales directory not found: {root}")

    return sorted(entry.name for entry in root.iterdir() if _is_locale_dir(entry))


def locale_files(root: Path | str, locale: str) -> list[Path]:
    """Return the JSON files making up a locale, root files first."""
    locale_dir = Path(root) / locale
    return _json_files(locale_dir) + _json_files(locale_dir / PAGES_DIR)


def _read_document(filepath: Path, cache: JsonFileCache) -> MessageTree:
    try:
        content = cache.load(filepath)
    except json.JSONDecodeError as e:
        raise LocaleLoadError(f"Invalid JSON in {filepath}: {e}", file=str(filepath)) from e
    except UnicodeDecodeError as e:
        raise LocaleLoadError(f"{filepath} is not valid UTF-8: {e}", file=str(filepath)) from e
    except OSError as e:
        raise LocaleLoadError(f"Cannot read {filepath}: {e}", file=str(filepath)) from e

    if not isinstance(content, dict):
        raise LocaleLoadError(
            f"{filepath} must contain a JSON object at the top level", file=str(filepath)
        )
    return content


def load_locale(
    root: Path | str,
    locale: str,
    cache: JsonFileCache | None = None,
) -> LocaleMessages:
    """Load every JSON file of one locale into a single message tree.

    Args:
        root: Directory containing one sub-directory per locale.
        locale: Locale code (sub-directory name).
        cache: Parsed-file cache shared across one run. A private one is
            used when omitted.

    Returns:
        LocaleMessages with the tree and a map from every string's logical
        path to the file it came from.

    Raises:
        LocaleLoadError: If the locale directory is missing or a file is
            unreadable, not UTF-8, invalid JSON, or not a JSON object.
    """
    root = Path(root)
    locale_dir = root / locale
    if not locale_dir.is_dir():
        raise LocaleLoadError(f"Locale directory not found: {locale_dir}")

    if cache is None:
        cache = JsonFileCache()

    messages: MessageTree = {}
    sources: dict[str, str] = {}
    files: list[str] = []

    def _mount(content: MessageTree, prefix: str, filepath: Path) -> None:
        for string_path, _ in iter_strings(content, prefix):
            sources[string_path] = str(filepath)
        files.append(str(filepath))

    for filepath in _json_files(locale_dir):
        key = filepath.stem
        content = _read_document(filepath, cache)
        messages[key] = content
        _mount(content, key, filepath)

    page_files = _json_files(locale_dir / PAGES_DIR)
    if page_files:
        pages = messages.get(PAGES_DIR)
        if not isinstance(pages, dict):
            if pages is not None:
                logger.warning(
                    "%s: top-level '%s' key is shadowed by the %s/ directory",
                    locale,
                    PAGES_DIR,
                    PAGES_DIR,
                )
            pages = {}
        else:
            pages = dict(pages)
        messages[PAGES_DIR] = pages

        for filepath in page_files:
            key = to_camel_case(filepath.stem)
            content = _read_document(filepath, cache)
            pages[key] = content
            _mount(content, f"{PAGES_DIR}.{key}", filepath)

    logger.debug("Loaded locale %s: %d files, %d strings", locale, len(files), len(sources))
    return LocaleMessages(locale=locale, messages=messages, sources=sources, files=files)
