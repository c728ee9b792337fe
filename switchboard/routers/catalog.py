"""
Catalog Router

Read-only access to the integration schemas, plus request preparation
for an operation's routing template.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from switchboard.catalog.registry import CatalogRegistry, get_catalog
from switchboard.catalog.requests import build_request
from switchboard.core.exceptions import CatalogError, MissingFieldError
from switchboard.models.contracts.catalog import (
    AppSchema,
    AppSummary,
    Operation,
    PreparedRequest,
    PrepareRequestBody,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["Catalog"])

Catalog = Annotated[CatalogRegistry, Depends(get_catalog)]


def _get_app_or_404(catalog: CatalogRegistry, app_id: str) -> AppSchema:
    app = catalog.get_app(app_id)
    if app is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"App '{app_id}' not found",
        )
    return app


def _get_operation_or_404(app: AppSchema, resource: str, operation: str) -> Operation:
    found_resource = app.get_resource(resource)
    if found_resource is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Resource '{resource}' not found in app '{app.id}'",
        )
    found_operation = found_resource.get_operation(operation)
    if found_operation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Operation '{operation}' not found in resource '{resource}'",
        )
    return found_operation


@router.get("/apps")
async def list_apps(
    catalog: Catalog,
    q: Annotated[str | None, Query(description="Search name, description and group")] = None,
    group: Annotated[str | None, Query(description="Exact group filter")] = None,
) -> list[AppSummary]:
    """List integration apps, optionally filtered."""
    apps = catalog.search(q) if q else catalog.all_apps()
    if group:
        in_group = {app.id for app in catalog.by_group(group)}
        apps = [app for app in apps if app.id in in_group]
    return [AppSummary.from_app(app) for app in apps]


@router.get("/apps/{app_id}")
async def get_app(app_id: str, catalog: Catalog) -> AppSchema:
    """Get an app's full schema."""
    return _get_app_or_404(catalog, app_id)


@router.get("/apps/{app_id}/resources/{resource}/operations/{operation}")
async def get_operation(app_id: str, resource: str, operation: str, catalog: Catalog) -> Operation:
    """Get one operation's fields and routing."""
    app = _get_app_or_404(catalog, app_id)
    return _get_operation_or_404(app, resource, operation)


@router.post("/apps/{app_id}/resources/{resource}/operations/{operation}/request")
async def prepare_request(
    app_id: str,
    resource: str,
    operation: str,
    body: PrepareRequestBody,
    catalog: Catalog,
) -> PreparedRequest:
    """
    Render the operation's HTTP request from field values.

    The request is returned, not sent.
    """
    app = _get_app_or_404(catalog, app_id)
    found = _get_operation_or_404(app, resource, operation)
    try:
        return build_request(app, found, body.values)
    except MissingFieldError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except CatalogError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
