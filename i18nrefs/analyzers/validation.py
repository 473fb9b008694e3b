"""Bulk validation of references across locales.

Every reference in every string is checked and every problem is collected;
nothing stops at the first failure. Checks per reference:

1. the path exists (with "did you mean" suggestions when it does not)
2. the target is a string, not an object/array/number
3. the modifier is one of upper, lower, capitalize

Strings whose references all pass are then fully resolved to catch
circular references and failures deeper in the chain.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from i18nrefs.analyzers.references import (
    SUPPORTED_MODIFIERS,
    CircularReferenceError,
    NonStringReferenceError,
    PathNotFoundError,
    ReferenceResolutionError,
    describe_type,
    extract_references,
    get_value_by_path,
    resolve_reference,
)
from i18nrefs.config import DEFAULT_MAX_SUGGESTIONS
from i18nrefs.logging import log_operation, logger, progress_bar
from i18nrefs.models.messages import (
    Diagnostic,
    LocaleMessages,
    LocaleReport,
    MessageTree,
    ValidationReport,
    ValidationSummary,
)
from i18nrefs.utils.cache import JsonFileCache
from i18nrefs.utils.loader import LocaleLoadError, discover_locales, load_locale
from i18nrefs.utils.tree import iter_string_paths, iter_strings


def find_similar_paths(
    target_path: str,
    messages: MessageTree,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> list[str]:
    """Suggest existing string paths that look like ``target_path``.

    Scoring per candidate:
    - +10 if the last segment matches exactly, else +5 if either last
      segment contains the other
    - +2 if both paths have the same number of segments
    - +1 for every segment equal to the target segment at the same position

    Args:
        target_path: The path that was not found.
        messages: Message tree to search.
        max_suggestions: Maximum number of paths returned.

    Returns:
        Best-scoring paths first; ties keep tree order.
    """
    if max_suggestions <= 0:
        return []

    target_parts = target_path.split(".")
    target_last = target_parts[-1]

    scored: list[tuple[int, str]] = []
    for candidate in iter_string_paths(messages):
        parts = candidate.split(".")
        last = parts[-1]
        score = 0

        if last == target_last:
            score += 10
        elif last in target_last or target_last in last:
            score += 5

        if len(parts) == len(target_parts):
            score += 2

        score += sum(1 for a, b in zip(parts, target_parts) if a == b)

        if score > 0:
            scored.append((score, candidate))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [path for _, path in scored[:max_suggestions]]


def _missing_path_suggestion(path: str, similar: list[str]) -> str:
    suggestion = f'The path "{path}" does not exist in the locale messages.'
    if similar:
        bullets = "\n".join(f"  • {p}" for p in similar)
        return f"{suggestion}\nDid you mean one of these?\n{bullets}"
    return (
        f"{suggestion}\nCheck that the path is correct and the referenced key "
        "exists in your locale files."
    )


def _check_references(
    locale: str,
    string_path: str,
    value: str,
    messages: MessageTree,
    source: str | None,
    max_suggestions: int,
) -> tuple[list[Diagnostic], int]:
    """Run the single-token checks on one string.

    Returns:
        Diagnostics in left-to-right token order, and the token count.
    """
    diagnostics: list[Diagnostic] = []
    count = 0

    for ref in extract_references(value):
        count += 1
        try:
            target = get_value_by_path(messages, ref.path)
        except PathNotFoundError:
            similar = find_similar_paths(ref.path, messages, max_suggestions)
            diagnostics.append(
                Diagnostic(
                    locale=locale,
                    kind="path_not_found",
                    message="Path not found",
                    path=string_path,
                    file=source,
                    reference=ref.match,
                    details=(
                        f'Reference "{ref.match}" in path "{string_path}" points to '
                        f'non-existent path "{ref.path}"'
                    ),
                    suggestion=_missing_path_suggestion(ref.path, similar),
                )
            )
            continue

        if not isinstance(target, str):
            actual_type = describe_type(target)
            diagnostics.append(
                Diagnostic(
                    locale=locale,
                    kind="non_string_reference",
                    message="Invalid reference type",
                    path=string_path,
                    file=source,
                    reference=ref.match,
                    details=(
                        f'Reference "{ref.match}" in path "{string_path}" points to '
                        f'a {actual_type} at "{ref.path}"'
                    ),
                    suggestion=(
                        f'The path "{ref.path}" exists but points to a {actual_type}, '
                        "not a string. You can only reference string values."
                    ),
                )
            )
            continue

        if ref.modifier and ref.modifier not in SUPPORTED_MODIFIERS:
            diagnostics.append(
                Diagnostic(
                    locale=locale,
                    kind="unsupported_modifier",
                    message="Invalid modifier",
                    path=string_path,
                    file=source,
                    reference=ref.match,
                    details=(
                        f'Modifier "{ref.modifier}" in reference "{ref.match}" '
                        "is not supported"
                    ),
                    suggestion=(
                        f"Use one of: {', '.join(SUPPORTED_MODIFIERS)}. "
                        f"Example: @.upper:{ref.path}"
                    ),
                )
            )

    return diagnostics, count


def _resolution_diagnostic(
    locale: str,
    string_path: str,
    source: str | None,
    error: ReferenceResolutionError | RecursionError,
) -> Diagnostic:
    if isinstance(error, RecursionError):
        return Diagnostic(
            locale=locale,
            kind="resolution_failed",
            message="Resolution failed",
            path=string_path,
            file=source,
            details=(
                f'Failed to resolve references in "{string_path}": reference chain too deep'
            ),
            suggestion=(
                "Shorten the chain by referencing a string closer to its final value."
            ),
        )
    if isinstance(error, CircularReferenceError):
        kind = "circular_reference"
        message = "Circular reference"
        suggestion = (
            "Break the cycle by using a direct string value instead of a "
            f"reference somewhere in: {' -> '.join(error.cycle)}"
        )
    elif isinstance(error, NonStringReferenceError):
        kind = "resolution_failed"
        message = "Resolution failed"
        suggestion = (
            "A nested reference points to a non-string value. "
            "Only string values can be referenced."
        )
    else:
        kind = "resolution_failed"
        message = "Resolution failed"
        suggestion = (
            "Check the reference syntax and ensure all referenced paths exist "
            "and are valid strings."
        )

    return Diagnostic(
        locale=locale,
        kind=kind,
        message=message,
        path=string_path,
        file=source,
        details=f'Failed to resolve references in "{string_path}": {error}',
        suggestion=suggestion,
    )


def validate_messages(
    locale_messages: LocaleMessages,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> LocaleReport:
    """Validate every reference in one locale's message tree.

    Args:
        locale_messages: Loaded locale (tree plus source file map).
        max_suggestions: Similar paths offered for a missing target.

    Returns:
        LocaleReport with all diagnostics, grouped by string in tree order.
    """
    locale = locale_messages.locale
    messages = locale_messages.messages
    report = LocaleReport(locale=locale)

    for string_path, value in iter_strings(messages):
        report.strings_checked += 1
        source = locale_messages.source_of(string_path)

        token_diagnostics, count = _check_references(
            locale, string_path, value, messages, source, max_suggestions
        )
        report.references_checked += count
        report.diagnostics.extend(token_diagnostics)

        if count == 0 or token_diagnostics:
            # Already reported; resolving would only repeat the same error
            continue

        try:
            resolve_reference(value, messages, ())
        except (ReferenceResolutionError, RecursionError) as e:
            report.diagnostics.append(_resolution_diagnostic(locale, string_path, source, e))

    return report


def validate_tree(
    messages: MessageTree,
    locale: str = "default",
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> LocaleReport:
    """Validate an in-memory tree that has no source file information."""
    return validate_messages(LocaleMessages(locale=locale, messages=messages), max_suggestions)


def _load_error_report(locale: str, error: LocaleLoadError) -> LocaleReport:
    return LocaleReport(
        locale=locale,
        diagnostics=[
            Diagnostic(
                locale=locale,
                kind="load_error",
                message="Load error",
                path="root",
                file=error.file,
                details=f"Failed to load locale {locale}: {error}",
                suggestion=(
                    "Check that the locale directory exists and all JSON files are valid."
                ),
            )
        ],
    )


def validate_locale(
    root: Path | str,
    locale: str,
    cache: JsonFileCache | None = None,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
) -> LocaleReport:
    """Load and validate one locale. Load failures become diagnostics."""
    with log_operation("validate_locale", {"locale": locale}):
        try:
            locale_messages = load_locale(root, locale, cache=cache)
        except LocaleLoadError as e:
            logger.warning("Could not load locale %s: %s", locale, e)
            return _load_error_report(locale, e)

        report = validate_messages(locale_messages, max_suggestions)
        logger.info(
            "%s: %d strings, %d references, %d problems",
            locale,
            report.strings_checked,
            report.references_checked,
            len(report.diagnostics),
        )
        return report


def validate_locales(
    root: Path | str,
    locales: list[str] | None = None,
    workers: int = 1,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    cache: JsonFileCache | None = None,
    show_progress: bool = True,
) -> ValidationReport:
    """Validate references in every locale under ``root``.

    Locales are independent, so they may be checked concurrently
    (``workers > 1``). The report lists locales sorted by code.

    Args:
        root: Directory containing one sub-directory per locale.
        locales: Locale codes to check (default: all discovered).
        workers: Thread pool size.
        max_suggestions: Similar paths offered for a missing target.
        cache: Parsed-file cache for this run (a fresh one by default).
        show_progress: Show a progress bar on interactive terminals.

    Returns:
        ValidationReport with per-locale results and totals.

    Raises:
        LocaleLoadError: If ``root`` itself does not exist.
    """
    if locales is None:
        locales = discover_locales(root)
    if cache is None:
        cache = JsonFileCache()

    reports: list[LocaleReport] = []

    if workers > 1 and len(locales) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(validate_locale, root, locale, cache, max_suggestions)
                for locale in locales
            ]
            for future in progress_bar(
                as_completed(futures),
                desc="Validating",
                total=len(futures),
                unit="locales",
                disable=not show_progress,
            ):
                reports.append(future.result())
    else:
        for locale in progress_bar(
            locales, desc="Validating", total=len(locales), unit="locales", disable=not show_progress
        ):
            reports.append(validate_locale(root, locale, cache, max_suggestions))

    reports.sort(key=lambda r: r.locale)

    summary = ValidationSummary(
        locales_checked=len(reports),
        total_strings=sum(r.strings_checked for r in reports),
        total_references=sum(r.references_checked for r in reports),
        total_errors=sum(len(r.diagnostics) for r in reports),
    )
    return ValidationReport(locales=reports, summary=summary)
