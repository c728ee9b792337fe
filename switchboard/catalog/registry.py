"""
Integration catalog registry.

Loads the per-app YAML schema files into pydantic models and serves them
from an in-memory, read-only registry. Schemas are loaded once and never
mutated, so a single registry is shared by every request.

Stateless beyond the loaded data. No DB dependency.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from switchboard.config import get_settings
from switchboard.core.exceptions import CatalogError
from switchboard.models.contracts.catalog import AppSchema, Operation, Resource

logger = logging.getLogger(__name__)

SCHEMA_GLOB = "*.yaml"


# =============================================================================
# Parse
# =============================================================================


def parse_app_schema(yaml_str: str, source: str = "<string>") -> AppSchema:
    """Parse a YAML string into an AppSchema."""
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise CatalogError(f"{source}: invalid YAML: {e}") from e

    if not data or not isinstance(data, dict):
        raise CatalogError(f"{source}: expected a mapping at the top level")

    try:
        return AppSchema.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"{source}: {e}") from e


def load_app_schema(path: Path) -> AppSchema:
    """Load one app schema file."""
    return parse_app_schema(path.read_text(encoding="utf-8"), source=path.name)


def serialize_app_schema(app: AppSchema) -> str:
    """Serialize an AppSchema back to YAML with the original camelCase keys."""
    data = app.model_dump(mode="json", by_alias=True, exclude_none=True)
    return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


# =============================================================================
# Registry
# =============================================================================


class CatalogRegistry:
    """Read-only lookup over loaded app schemas, in load order."""

    def __init__(self, apps: list[AppSchema] | None = None):
        self._apps: dict[str, AppSchema] = {}
        for app in apps or []:
            if app.id in self._apps:
                raise CatalogError(f"Duplicate app id: {app.id}")
            self._apps[app.id] = app

    @classmethod
    def from_directory(cls, directory: Path) -> CatalogRegistry:
        """
        Load every schema file in a directory, in sorted filename order.

        Raises:
            CatalogError: If the directory is missing, a file fails to parse,
                or two files declare the same app id.
        """
        if not directory.is_dir():
            raise CatalogError(f"Catalog directory not found: {directory}")

        apps: list[AppSchema] = []
        sources: dict[str, str] = {}
        for path in sorted(directory.glob(SCHEMA_GLOB)):
            app = load_app_schema(path)
            if app.id in sources:
                raise CatalogError(
                    f"Duplicate app id '{app.id}' in {sources[app.id]} and {path.name}"
                )
            sources[app.id] = path.name
            apps.append(app)

        logger.info(f"Loaded {len(apps)} integration schemas from {directory}")
        return cls(apps)

    def __len__(self) -> int:
        return len(self._apps)

    def __contains__(self, app_id: object) -> bool:
        return app_id in self._apps

    def all_apps(self) -> list[AppSchema]:
        return list(self._apps.values())

    def app_ids(self) -> list[str]:
        return list(self._apps)

    def get_app(self, app_id: str) -> AppSchema | None:
        return self._apps.get(app_id)

    def get_resource(self, app_id: str, resource: str) -> Resource | None:
        app = self.get_app(app_id)
        if app is None:
            return None
        return app.get_resource(resource)

    def get_operation(self, app_id: str, resource: str, operation: str) -> Operation | None:
        found = self.get_resource(app_id, resource)
        if found is None:
            return None
        return found.get_operation(operation)

    def search(self, query: str) -> list[AppSchema]:
        """Case-insensitive substring match on name, description, or group."""
        needle = query.strip().lower()
        if not needle:
            return self.all_apps()
        return [
            app for app in self._apps.values()
            if needle in app.name.lower()
            or needle in app.description.lower()
            or any(needle in group.lower() for group in app.group)
        ]

    def by_group(self, group: str) -> list[AppSchema]:
        """Apps tagged with a group (case-insensitive exact match)."""
        wanted = group.strip().lower()
        return [
            app for app in self._apps.values()
            if any(g.lower() == wanted for g in app.group)
        ]


@lru_cache
def get_catalog() -> CatalogRegistry:
    """Get the process-wide catalog loaded from the configured directory."""
    return CatalogRegistry.from_directory(get_settings().catalog_path)
