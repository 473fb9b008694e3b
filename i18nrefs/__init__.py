"""i18nrefs - reference resolution and validation for translation messages."""

from dotenv import load_dotenv

# Load .env so I18NREFS_* settings are visible to every entry point
# (CLI, pytest, scripts) that imports i18nrefs.
load_dotenv()

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"

from i18nrefs.analyzers.references import (  # noqa: E402
    CircularReferenceError,
    NonStringReferenceError,
    PathNotFoundError,
    ReferenceResolutionError,
    UnsupportedModifierError,
    extract_references,
    get_value_by_path,
    resolve_messages,
    resolve_reference,
    resolve_subtree,
)

__all__ = [
    "CircularReferenceError",
    "NonStringReferenceError",
    "PathNotFoundError",
    "ReferenceResolutionError",
    "UnsupportedModifierError",
    "__version__",
    "extract_references",
    "get_value_by_path",
    "resolve_messages",
    "resolve_reference",
    "resolve_subtree",
]
