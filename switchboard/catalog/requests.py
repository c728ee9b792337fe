"""
Request templates.

Renders an operation's routing template into a PreparedRequest: method,
URL with placeholders filled in, and the remaining field values split
into query parameters or a JSON body. Nothing is sent from here.
"""

from typing import Any
from urllib.parse import quote

from switchboard.catalog.visibility import is_field_visible
from switchboard.core.exceptions import CatalogError, MissingFieldError
from switchboard.models.contracts.catalog import AppSchema, Operation, PreparedRequest
from switchboard.models.enums import HttpMethod

QUERY_METHODS = {HttpMethod.GET, HttpMethod.DELETE}


def resolve_values(operation: Operation, values: dict[str, Any]) -> dict[str, Any]:
    """
    Map every field's API name to its effective value.

    Values are looked up by field name, then by field id, then the
    field's default. Keys that match no field are ignored.
    """
    resolved: dict[str, Any] = {}
    for field in operation.all_fields():
        if field.name in values:
            resolved[field.name] = values[field.name]
        elif field.id in values:
            resolved[field.name] = values[field.id]
        else:
            resolved[field.name] = field.default
    return resolved


def join_url(base_url: str | None, url: str) -> str:
    if not base_url or url.startswith(("http://", "https://")):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def build_request(app: AppSchema, operation: Operation, values: dict[str, Any]) -> PreparedRequest:
    """
    Prepare the HTTP request for an operation.

    Args:
        app: App the operation belongs to (supplies base_url)
        operation: Operation with a routing template
        values: Field values keyed by API name or field id

    Returns:
        PreparedRequest with the rendered URL, query and body

    Raises:
        CatalogError: If the operation has no HTTP routing
        MissingFieldError: If a path parameter or visible required field has no value
    """
    template = operation.request
    if template is None:
        raise CatalogError(f"Operation '{operation.id}' has no HTTP routing")

    resolved = resolve_values(operation, values)
    path_params = template.path_params

    url = template.url
    for param in path_params:
        field = operation.get_field(param)
        key = field.name if field else param
        value = resolved.get(key, values.get(param))
        if value is None or value == "":
            raise MissingFieldError(key, operation.id)
        url = url.replace(f"{{{param}}}", quote(str(value), safe=""))

    for field in operation.fields:
        if field.name in path_params or field.id in path_params:
            continue
        if resolved[field.name] in (None, "") and is_field_visible(field, resolved, operation):
            raise MissingFieldError(field.name, operation.id)

    params: dict[str, Any] = {}
    for field in operation.all_fields():
        if field.name in path_params or field.id in path_params:
            continue
        value = resolved[field.name]
        if value is None or not is_field_visible(field, resolved, operation):
            continue
        params[field.name] = value

    if template.method in QUERY_METHODS:
        query, body = params, None
    else:
        query, body = {}, params

    return PreparedRequest(
        method=template.method,
        url=join_url(app.base_url, url),
        query=query,
        body=body,
        headers=dict(template.headers or {}),
    )
