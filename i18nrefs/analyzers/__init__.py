"""Analyzers for translation message trees."""

from i18nrefs.analyzers.reference_graph import (
    build_reference_graph,
    find_reference_cycles,
    graph_summary,
    most_referenced,
)
from i18nrefs.analyzers.references import (
    SUPPORTED_MODIFIERS,
    CircularReferenceError,
    Modifier,
    NonStringReferenceError,
    PathNotFoundError,
    ReferenceResolutionError,
    References,
    UnsupportedModifierError,
    apply_modifier,
    extract_references,
    get_value_by_path,
    resolve_messages,
    resolve_reference,
    resolve_subtree,
)
from i18nrefs.analyzers.structure import compare_structures, locale_structure
from i18nrefs.analyzers.validation import (
    find_similar_paths,
    validate_locale,
    validate_locales,
    validate_messages,
    validate_tree,
)

__all__ = [
    # References
    "SUPPORTED_MODIFIERS",
    "CircularReferenceError",
    "Modifier",
    "NonStringReferenceError",
    "PathNotFoundError",
    "ReferenceResolutionError",
    "References",
    "UnsupportedModifierError",
    "apply_modifier",
    "extract_references",
    "get_value_by_path",
    "resolve_messages",
    "resolve_reference",
    "resolve_subtree",
    # Validation
    "find_similar_paths",
    "validate_locale",
    "validate_locales",
    "validate_messages",
    "validate_tree",
    # Structure
    "compare_structures",
    "locale_structure",
    # Graph
    "build_reference_graph",
    "find_reference_cycles",
    "graph_summary",
    "most_referenced",
]
