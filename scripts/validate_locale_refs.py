#!/usr/bin/env python3
"""
Validate i18n reference syntax in locale files.

Thin wrapper around i18nrefs.analyzers.validation for CI.

Checks:
- All @:path references point to existing paths
- All @.modifier:path references use a supported modifier
- Referenced values are strings (not objects/arrays)
- No circular references

Usage:
    python validate_locale_refs.py
    python validate_locale_refs.py locales/
    python validate_locale_refs.py --json
"""

import sys
from pathlib import Path

from i18nrefs.analyzers.validation import validate_locales
from i18nrefs.config import get_settings
from i18nrefs.models.messages import ValidationReport
from i18nrefs.utils.loader import LocaleLoadError

QUICK_REFERENCE = """Quick Reference Guide:
  • Reference format: @:path.to.value or @.modifier:path.to.value
  • Valid modifiers: upper, lower, capitalize
  • Only string values can be referenced (not objects/arrays)
  • Avoid circular references (A -> B -> A)"""


def format_file_path(file_path: str | None, base_dir: Path) -> str:
    """Show a source file relative to ``base_dir`` when it lives inside it."""
    if not file_path:
        return "unknown"
    try:
        return Path(file_path).resolve().relative_to(base_dir.resolve()).as_posix()
    except ValueError:
        return file_path


def print_results(report: ValidationReport, base_dir: Path) -> None:
    """Print validation results in a readable format."""
    print("Validating i18n reference syntax in locale files...")

    for locale_report in report.locales:
        print(f"\nChecking locale: {locale_report.locale}")

        if locale_report.ok:
            print("   ✓ All references valid")
            continue

        print(f"   ✗ Found {len(locale_report.diagnostics)} error(s):\n")
        for i, d in enumerate(locale_report.diagnostics, 1):
            print(f"   {i}. {d.message}")
            print(f"      Location: {d.path}")
            print(f"      File: {format_file_path(d.file, base_dir)}")
            print(f"      Details: {d.details}")
            if d.suggestion:
                print("      Suggestion:")
                for line in d.suggestion.split("\n"):
                    print(f"         {line}")
            if i < len(locale_report.diagnostics):
                print()

    summary = report.summary
    print("\n" + "=" * 70)
    print("Summary:")
    print(f"   Locales checked: {summary.locales_checked}")
    print(f"   Total errors: {summary.total_errors}")
    print("=" * 70)

    if report.ok:
        print("\n✓ All i18n references are valid!")
    else:
        print("\n✗ Validation failed! Please fix the errors above.\n")
        print(QUICK_REFERENCE)


def main() -> None:
    args = sys.argv[1:]
    json_output = "--json" in args
    args = [a for a in args if not a.startswith("--")]

    locales_dir = Path(args[0]) if args else get_settings().locales_dir

    if not locales_dir.is_dir():
        print(f"Error: {locales_dir} is not a directory", file=sys.stderr)
        sys.exit(1)

    try:
        report = validate_locales(locales_dir)
    except LocaleLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if json_output:
        print(report.model_dump_json(indent=2))
    else:
        print_results(report, locales_dir.parent)

    sys.exit(0 if report.ok else 1)


if __name__ == "__main__":
    main()
