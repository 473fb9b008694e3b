"""Data models for message trees, reference tokens and validation reports.

Pydantic models are used for everything that ends up serialized (CLI JSON
output, reports). The message tree itself stays a plain ``dict`` since it is
loaded straight from JSON.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# A message tree maps keys to leaf strings or nested trees. Content files can
# also carry arrays and scalars; those are never referenceable.
MessageTree = dict[str, Any]

DiagnosticKind = Literal[
    "path_not_found",
    "non_string_reference",
    "unsupported_modifier",
    "circular_reference",
    "resolution_failed",
    "load_error",
]


class ReferenceToken(BaseModel):
    """A single ``@:path`` / ``@.modifier:path`` occurrence inside a string."""

    match: str = Field(description="Full matched text, e.g. '@.upper:shared.title'")
    modifier: str | None = Field(default=None, description="Modifier name, if any")
    path: str = Field(description="Dotted path the token points at")
    start: int = Field(default=0, description="Offset of the token in the source string")
    end: int = Field(default=0, description="Offset just past the token")

    model_config = {"frozen": True}


class LocaleMessages(BaseModel):
    """A locale's message tree plus the file each string was loaded from."""

    locale: str = Field(description="Locale code, e.g. 'en' or 'zh-Hans'")
    messages: MessageTree = Field(default_factory=dict, description="Nested message tree")
    sources: dict[str, str] = Field(
        default_factory=dict,
        description="Logical string path (e.g. 'pages.home.title') -> source file",
    )
    files: list[str] = Field(default_factory=list, description="JSON files that were loaded")

    def source_of(self, string_path: str) -> str | None:
        """Return the file a string path was loaded from, if known."""
        return self.sources.get(string_path)


class Diagnostic(BaseModel):
    """One problem found while validating references."""

    locale: str = Field(description="Locale the problem was found in")
    kind: DiagnosticKind = Field(description="Category of the problem")
    message: str = Field(description="Short human-readable title")
    path: str = Field(description="Logical path of the string containing the reference")
    file: str | None = Field(default=None, description="Source file of that string")
    reference: str | None = Field(default=None, description="Raw reference token")
    details: str = Field(default="", description="Full explanation")
    suggestion: str | None = Field(default=None, description="How to fix it")


class LocaleReport(BaseModel):
    """Validation result for one locale."""

    locale: str
    strings_checked: int = Field(default=0, description="Leaf strings inspected")
    references_checked: int = Field(default=0, description="Reference tokens inspected")
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class ValidationSummary(BaseModel):
    """Totals across all validated locales."""

    locales_checked: int = 0
    total_strings: int = 0
    total_references: int = 0
    total_errors: int = 0
    generated_at: datetime = Field(default_factory=datetime.now)


class ValidationReport(BaseModel):
    """Validation result across locales."""

    locales: list[LocaleReport] = Field(default_factory=list)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for report in self.locales for d in report.diagnostics]

    @property
    def ok(self) -> bool:
        return self.summary.total_errors == 0


class StructureDifference(BaseModel):
    """A structural mismatch between a locale and the reference locale."""

    locale: str
    type: Literal["file_list", "file_missing", "key_structure"]
    file: str | None = None
    message: str | None = None
    missing: list[str] = Field(
        default_factory=list, description="Present in the reference locale only"
    )
    extra: list[str] = Field(default_factory=list, description="Present in this locale only")


class StructureReport(BaseModel):
    """Result of comparing every locale's key structure to a reference."""

    reference_locale: str | None = None
    locales: list[str] = Field(default_factory=list)
    file_counts: dict[str, int] = Field(default_factory=dict)
    differences: list[StructureDifference] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.differences
