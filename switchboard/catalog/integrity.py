"""
Catalog integrity checks.

Cross-reference checks over loaded app schemas. Each check returns a list
of IntegrityIssue records; an empty list means the catalog is consistent.
Schemas are not rejected at load time, so these run from tests and the
``switchboard check-catalog`` command.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from switchboard.catalog.registry import CatalogRegistry
from switchboard.models.contracts.catalog import AppSchema, Operation, Resource
from switchboard.models.enums import FieldType

OPTION_FIELD_TYPES = {FieldType.OPTIONS, FieldType.MULTI_OPTIONS}


@dataclass(frozen=True)
class IntegrityIssue:
    """One integrity violation, located by app and dotted path."""
    app_id: str
    location: str
    code: str
    message: str

    def __str__(self) -> str:
        return f"[{self.code}] {self.app_id}:{self.location}: {self.message}"


def _operations(app: AppSchema) -> Iterator[tuple[Resource, Operation]]:
    for resource in app.resources:
        for operation in resource.operations:
            yield resource, operation


def check_route_placeholders(app: AppSchema) -> list[IntegrityIssue]:
    """Every {param} in a routing URL must name one of the operation's required fields."""
    issues: list[IntegrityIssue] = []
    for resource, operation in _operations(app):
        request = operation.request
        if request is None:
            continue
        required = {f.name for f in operation.fields} | {f.id for f in operation.fields}
        for param in request.path_params:
            if param not in required:
                issues.append(IntegrityIssue(
                    app_id=app.id,
                    location=f"{resource.id}.{operation.id}",
                    code="unbound-placeholder",
                    message=f"URL placeholder '{{{param}}}' has no required field in {request.url}",
                ))
    return issues


def check_option_lists(app: AppSchema) -> list[IntegrityIssue]:
    """
    Every options/multiOptions field lists at least one choice, and every
    choice has both a name and a value. Fields whose options are loaded
    dynamically are exempt from the non-empty rule.
    """
    issues: list[IntegrityIssue] = []
    for resource, operation in _operations(app):
        for field in operation.all_fields():
            if field.type not in OPTION_FIELD_TYPES:
                continue
            location = f"{resource.id}.{operation.id}.{field.name}"
            if not field.options and not field.has_dynamic_options:
                issues.append(IntegrityIssue(
                    app_id=app.id,
                    location=location,
                    code="empty-options",
                    message=f"{field.type.value} field has no options",
                ))
            for index, option in enumerate(field.options or []):
                if not option.name or option.value is None:
                    issues.append(IntegrityIssue(
                        app_id=app.id,
                        location=f"{location}[{index}]",
                        code="incomplete-option",
                        message="Option must have both a name and a value",
                    ))
    return issues


def _duplicates(values: Iterable[str]) -> list[str]:
    return [value for value, count in Counter(values).items() if count > 1]


def check_unique_ids(app: AppSchema) -> list[IntegrityIssue]:
    """Resource ids unique per app, operation ids per resource, field names per operation."""
    issues: list[IntegrityIssue] = []

    for dup in _duplicates(r.id for r in app.resources):
        issues.append(IntegrityIssue(app.id, dup, "duplicate-resource", f"Resource id '{dup}' is declared more than once"))

    for resource in app.resources:
        for dup in _duplicates(op.id for op in resource.operations):
            issues.append(IntegrityIssue(
                app.id, f"{resource.id}.{dup}", "duplicate-operation",
                f"Operation id '{dup}' is declared more than once",
            ))
        for operation in resource.operations:
            for dup in _duplicates(f.name for f in operation.all_fields()):
                issues.append(IntegrityIssue(
                    app.id, f"{resource.id}.{operation.id}.{dup}", "duplicate-field",
                    f"Field '{dup}' is declared more than once",
                ))
    return issues


def check_unique_app_ids(apps: Iterable[AppSchema]) -> list[IntegrityIssue]:
    """App ids must be globally unique."""
    return [
        IntegrityIssue(dup, "", "duplicate-app", f"App id '{dup}' is declared more than once")
        for dup in _duplicates(app.id for app in apps)
    ]


def check_app(app: AppSchema) -> list[IntegrityIssue]:
    """Run every per-app check."""
    return [
        *check_route_placeholders(app),
        *check_option_lists(app),
        *check_unique_ids(app),
    ]


def check_catalog(registry: CatalogRegistry) -> list[IntegrityIssue]:
    """Run all checks over a loaded catalog."""
    apps = registry.all_apps()
    issues = check_unique_app_ids(apps)
    for app in apps:
        issues.extend(check_app(app))
    return issues
