"""
i18nrefs helper scripts.

- Locale reference validation for CI (validate_locale_refs)
"""
