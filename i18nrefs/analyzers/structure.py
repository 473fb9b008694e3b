"""Cross-locale structure comparison.

Every locale should ship the same JSON files with the same key paths.
One locale (the first in sorted order unless given) is the reference;
every other locale is diffed against it.
"""

from pathlib import Path

from i18nrefs.logging import logger
from i18nrefs.models.messages import StructureDifference, StructureReport
from i18nrefs.utils.cache import JsonFileCache
from i18nrefs.utils.loader import LocaleLoadError, discover_locales, locale_files
from i18nrefs.utils.tree import collect_key_paths


def locale_structure(
    root: Path | str,
    locale: str,
    cache: JsonFileCache | None = None,
) -> dict[str, set[str]]:
    """Map each JSON file of a locale (relative path) to its key paths.

    Raises:
        LocaleLoadError: If a file cannot be parsed.
    """
    if cache is None:
        cache = JsonFileCache()

    locale_dir = Path(root) / locale
    if not locale_dir.is_dir():
        raise LocaleLoadError(f"Translation directory not found: {locale_dir}")

    structure: dict[str, set[str]] = {}
    for filepath in locale_files(root, locale):
        relative = filepath.relative_to(locale_dir).as_posix()
        try:
            document = cache.load(filepath)
        except (OSError, ValueError) as e:
            raise LocaleLoadError(f"Failed to parse {relative}: {e}", file=str(filepath)) from e
        structure[relative] = collect_key_paths(document)

    return structure


def compare_structures(
    root: Path | str,
    reference_locale: str | None = None,
    locales: list[str] | None = None,
    cache: JsonFileCache | None = None,
) -> StructureReport:
    """Compare the file and key structure of every locale to a reference.

    Args:
        root: Directory containing one sub-directory per locale.
        reference_locale: Locale to compare against (default: first sorted).
        locales: Locales to include (default: all discovered).
        cache: Parsed-file cache for this run.

    Returns:
        StructureReport listing every difference found.

    Raises:
        LocaleLoadError: If no locales exist, the reference locale is not
            among them, or a file cannot be parsed.
    """
    if locales is None:
        locales = discover_locales(root)
    if not locales:
        raise LocaleLoadError(f"No translations found in {root}")
    if cache is None:
        cache = JsonFileCache()

    reference = reference_locale or locales[0]
    if reference not in locales:
        raise LocaleLoadError(f"Reference locale {reference!r} not found in {root}")

    structures = {locale: locale_structure(root, locale, cache) for locale in locales}
    report = StructureReport(
        reference_locale=reference,
        locales=list(locales),
        file_counts={locale: len(files) for locale, files in structures.items()},
    )

    if len(locales) == 1:
        logger.info("Only one translation found (%s), nothing to compare", reference)
        return report

    ref_structure = structures[reference]
    ref_files = set(ref_structure)

    for locale in locales:
        if locale == reference:
            continue
        structure = structures[locale]
        files = set(structure)

        missing_files = sorted(ref_files - files)
        extra_files = sorted(files - ref_files)
        if missing_files or extra_files:
            report.differences.append(
                StructureDifference(
                    locale=locale, type="file_list", missing=missing_files, extra=extra_files
                )
            )

        for file in sorted(ref_files | files):
            if file not in ref_structure:
                report.differences.append(
                    StructureDifference(
                        locale=locale,
                        type="file_missing",
                        file=file,
                        message=f"File exists in {locale} but not in {reference}",
                    )
                )
                continue
            if file not in structure:
                report.differences.append(
                    StructureDifference(
                        locale=locale,
                        type="file_missing",
                        file=file,
                        message=f"File exists in {reference} but not in {locale}",
                    )
                )
                continue

            missing_keys = sorted(ref_structure[file] - structure[file])
            extra_keys = sorted(structure[file] - ref_structure[file])
            if missing_keys or extra_keys:
                report.differences.append(
                    StructureDifference(
                        locale=locale,
                        type="key_structure",
                        file=file,
                        missing=missing_keys,
                        extra=extra_keys,
                    )
                )

    return report
