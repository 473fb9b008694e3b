"""CLI interface for i18nrefs.

Provides commands to validate, resolve and inspect locale message trees.
"""

import json
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env before importing other i18nrefs modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from i18nrefs import __version__  # noqa: E402
from i18nrefs.config import get_settings  # noqa: E402
from i18nrefs.logging import set_verbosity  # noqa: E402


def _locales_dir(locales_dir: str | None) -> Path:
    if locales_dir:
        return Path(locales_dir)
    return get_settings().locales_dir


@click.group()
@click.version_option(version=__version__, prog_name="i18nrefs")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.option("-q", "--quiet", is_flag=True, help="Only log warnings and errors")
def cli(verbose: bool, quiet: bool) -> None:
    """i18nrefs - resolve and validate @:path references in locale files."""
    set_verbosity(verbose=verbose, quiet=quiet)


@cli.command()
@click.argument("locales_dir", required=False, type=click.Path(file_okay=False))
@click.option(
    "--locale",
    "locales",
    multiple=True,
    help="Locale to check (repeatable, default: all discovered)",
)
@click.option("--workers", type=int, default=None, help="Locales checked in parallel")
@click.option(
    "--max-suggestions",
    type=int,
    default=None,
    help="Similar paths suggested for a missing target",
)
@click.option("--json", "json_output", is_flag=True, help="Output the report as JSON")
def validate(
    locales_dir: str | None,
    locales: tuple[str, ...],
    workers: int | None,
    max_suggestions: int | None,
    json_output: bool,
) -> None:
    """Validate every reference in every locale.

    LOCALES_DIR: Directory with one sub-directory per locale
    (default: $I18NREFS_LOCALES_DIR or ./locales).

    Exits with status 1 when any problem is found.
    """
    from i18nrefs.analyzers.validation import validate_locales
    from i18nrefs.utils.loader import LocaleLoadError

    settings = get_settings()
    root = _locales_dir(locales_dir)

    try:
        report = validate_locales(
            root,
            locales=list(locales) or None,
            workers=workers or settings.workers,
            max_suggestions=(
                settings.max_suggestions if max_suggestions is None else max_suggestions
            ),
            show_progress=not settings.disable_progress,
        )
    except LocaleLoadError as e:
        click.echo(f"Validation failed: {e}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(report.model_dump_json(indent=2))
    else:
        for locale_report in report.locales:
            if locale_report.ok:
                click.echo(f"✓ {locale_report.locale}: all references valid")
                continue
            click.echo(
                f"✗ {locale_report.locale}: {len(locale_report.diagnostics)} problem(s)"
            )
            for d in locale_report.diagnostics:
                click.echo(f"    [{d.kind}] {d.path} ({d.file or 'unknown'})")
                click.echo(f"        {d.details}")
        summary = report.summary
        click.echo(
            f"\n{summary.locales_checked} locale(s), {summary.total_strings} strings, "
            f"{summary.total_references} references, {summary.total_errors} error(s)"
        )

    if not report.ok:
        sys.exit(1)


@cli.command()
@click.argument("locales_dir", required=False, type=click.Path(file_okay=False))
@click.option("--reference", help="Locale to compare against (default: first sorted)")
@click.option("--json", "json_output", is_flag=True, help="Output the report as JSON")
def structure(locales_dir: str | None, reference: str | None, json_output: bool) -> None:
    """Check that every locale has the same files and keys.

    LOCALES_DIR: Directory with one sub-directory per locale.
    """
    from i18nrefs.analyzers.structure import compare_structures
    from i18nrefs.utils.loader import LocaleLoadError

    try:
        report = compare_structures(_locales_dir(locales_dir), reference_locale=reference)
    except LocaleLoadError as e:
        click.echo(f"Structure check failed: {e}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(report.model_dump_json(indent=2))
    else:
        click.echo(f"Reference locale: {report.reference_locale}")
        for diff in report.differences:
            where = f" {diff.file}" if diff.file else ""
            click.echo(f"✗ {diff.locale} [{diff.type}]{where}")
            if diff.message:
                click.echo(f"    {diff.message}")
            for key in diff.missing:
                click.echo(f"    missing: {key}")
            for key in diff.extra:
                click.echo(f"    extra:   {key}")
        if report.ok:
            click.echo(f"✓ All {len(report.locales)} translation structures are identical")

    if not report.ok:
        sys.exit(1)


@cli.command()
@click.argument("locales_dir", required=False, type=click.Path(file_okay=False))
@click.option("--locale", required=True, help="Locale to resolve")
@click.option("--key", help="Dotted path of a single string to resolve")
def resolve(locales_dir: str | None, locale: str, key: str | None) -> None:
    """Print a locale's messages with every reference expanded.

    LOCALES_DIR: Directory with one sub-directory per locale.
    """
    from i18nrefs.analyzers.references import (
        ReferenceResolutionError,
        get_value_by_path,
        resolve_messages,
        resolve_subtree,
    )
    from i18nrefs.utils.loader import LocaleLoadError, load_locale

    try:
        messages = load_locale(_locales_dir(locales_dir), locale).messages
        if key:
            result = resolve_subtree(get_value_by_path(messages, key), messages)
        else:
            result = resolve_messages(messages)
    except (LocaleLoadError, ReferenceResolutionError, RecursionError) as e:
        click.echo(f"Resolution failed: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("locales_dir", required=False, type=click.Path(file_okay=False))
@click.option("--locale", required=True, help="Locale to inspect")
def graph(locales_dir: str | None, locale: str) -> None:
    """Summarize a locale's reference graph (cycles, missing targets, hubs).

    LOCALES_DIR: Directory with one sub-directory per locale.

    Exits with status 1 when the graph contains a cycle.
    """
    from i18nrefs.analyzers.reference_graph import build_reference_graph, graph_summary
    from i18nrefs.utils.loader import LocaleLoadError, load_locale

    try:
        messages = load_locale(_locales_dir(locales_dir), locale).messages
    except LocaleLoadError as e:
        click.echo(f"Graph failed: {e}", err=True)
        sys.exit(1)

    summary = graph_summary(build_reference_graph(messages))
    click.echo(json.dumps(summary, indent=2, ensure_ascii=False))

    if summary["cycles"]:
        sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
