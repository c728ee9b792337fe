"""
Integration catalog contract models.

Declarative description of third-party API surfaces in the
App -> Resource -> Operation -> Field shape. Schema files use camelCase
keys; attributes are snake_case and serialize back to camelCase.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from switchboard.models.enums import CredentialFieldType, CredentialType, FieldType, HttpMethod

PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")


class CatalogModel(BaseModel):
    """Base for catalog models: camelCase aliases, unknown keys ignored."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# ==================== FIELDS ====================


class FieldOption(CatalogModel):
    """
    One enumerated choice for an options/multiOptions field.

    fixedCollection fields reuse this shape for their groups, carrying
    ``values`` (the group's sub-fields) instead of a ``value``.
    """
    name: str
    value: str | int | float | bool | None = None
    display_name: str | None = None
    description: str | None = None
    values: list["FieldDefinition"] | None = None


class FieldTypeOptions(CatalogModel):
    """Renderer hints for a field."""
    load_options_method: str | None = Field(
        default=None, description="Name of the dynamic option loader (options come from the API)")
    load_options_depends_on: list[str] | None = None
    min_value: float | None = None
    max_value: float | None = None
    number_precision: int | None = None
    rows: int | None = None
    password: bool | None = None
    multiple_values: bool | None = None
    always_open_edit_window: bool | None = None


class FieldValidation(CatalogModel):
    """Client-side validation rules for a field."""
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    pattern_message: str | None = None


class DisplayOptions(CatalogModel):
    """
    Conditional visibility keyed on sibling field names.

    ``show`` requires every listed sibling to hold one of its values;
    ``hide`` hides the field when any listed sibling matches.
    """
    show: dict[str, list[Any]] | None = None
    hide: dict[str, list[Any]] | None = None


class FieldDefinition(CatalogModel):
    """One form input for an operation's parameters."""
    id: str
    display_name: str
    name: str = Field(..., description="API parameter name")
    type: FieldType
    required: bool = False
    default: Any = None
    description: str | None = None
    placeholder: str | None = None
    hint: str | None = None
    options: list[FieldOption] | None = None
    type_options: FieldTypeOptions | None = None
    validation: FieldValidation | None = None
    display_options: DisplayOptions | None = None
    fixed_collection_fields: list["FieldDefinition"] | None = None

    @model_validator(mode="before")
    @classmethod
    def default_id_from_name(cls, data: Any) -> Any:
        """fixedCollection sub-fields are written with ``name`` only."""
        if isinstance(data, dict) and "id" not in data and data.get("name"):
            return {**data, "id": data["name"]}
        return data

    @property
    def has_dynamic_options(self) -> bool:
        """Options are loaded at runtime instead of listed statically."""
        return bool(self.type_options and self.type_options.load_options_method)


FieldOption.model_rebuild()


# ==================== OPERATIONS ====================


class RoutingRequest(CatalogModel):
    """HTTP method and URL template for an operation."""
    method: HttpMethod
    url: str
    headers: dict[str, str] | None = None

    @property
    def path_params(self) -> list[str]:
        """Placeholder names in the URL template, in order of appearance."""
        return PLACEHOLDER_PATTERN.findall(self.url)


class Routing(CatalogModel):
    request: RoutingRequest | None = None


class Operation(CatalogModel):
    """One invocable action within a resource."""
    id: str
    name: str
    value: str
    description: str = ""
    action: str = ""
    fields: list[FieldDefinition] = Field(
        default_factory=list, description="Required fields")
    optional_fields: list[FieldDefinition] = Field(default_factory=list)
    routing: Routing | None = None
    requires_credential: bool | None = None
    credential_type: str | None = None

    @property
    def request(self) -> RoutingRequest | None:
        return self.routing.request if self.routing else None

    def all_fields(self) -> list[FieldDefinition]:
        return [*self.fields, *self.optional_fields]

    def get_field(self, key: str) -> FieldDefinition | None:
        """Find a field by API name or id."""
        for field in self.all_fields():
            if field.name == key or field.id == key:
                return field
        return None


# ==================== RESOURCES ====================


class Resource(CatalogModel):
    """A named grouping of operations on one API object type."""
    id: str
    name: str
    value: str
    description: str | None = None
    operations: list[Operation] = Field(default_factory=list)

    def get_operation(self, key: str) -> Operation | None:
        """Find an operation by id or value."""
        for operation in self.operations:
            if operation.id == key or operation.value == key:
                return operation
        return None


# ==================== CREDENTIALS ====================


class CredentialTestRequest(CatalogModel):
    method: HttpMethod
    url: str


class CredentialField(CatalogModel):
    """One input of a credential form."""
    id: str | None = None
    display_name: str | None = None
    name: str
    type: CredentialFieldType = CredentialFieldType.STRING
    required: bool = False
    default: Any = None
    description: str | None = None
    placeholder: str | None = None
    options: list[FieldOption] | None = None
    type_options: FieldTypeOptions | None = None


class Credential(CatalogModel):
    """Credential definition (OAuth2, API key, service account, ...)."""
    id: str | None = None
    name: str
    display_name: str | None = None
    type: CredentialType
    required: bool = False
    fields: list[CredentialField] = Field(default_factory=list)
    test_request: CredentialTestRequest | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_legacy_keys(cls, data: Any) -> Any:
        """Accept ``properties`` for ``fields`` and lowercase ``oauth2``."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "properties" in data and "fields" not in data:
            data["fields"] = data.pop("properties")
        if data.get("type") == "oauth2":
            data["type"] = CredentialType.OAUTH2.value
        return data


# ==================== APPS ====================


class AppSchema(CatalogModel):
    """Static descriptor of one third-party integration."""
    id: str
    name: str
    icon: str = ""
    color: str = ""
    description: str = ""
    version: str = "1.0"
    subtitle: str | None = None
    group: list[str] = Field(default_factory=list)
    documentation_url: str | None = None
    base_url: str | None = Field(
        default=None, description="Prefix joined onto operation URL templates")
    credentials: list[Credential] = Field(default_factory=list)
    resources: list[Resource] = Field(default_factory=list)

    def get_resource(self, key: str) -> Resource | None:
        """Find a resource by id or value."""
        for resource in self.resources:
            if resource.id == key or resource.value == key:
                return resource
        return None

    @property
    def operation_count(self) -> int:
        return sum(len(r.operations) for r in self.resources)


class AppSummary(CatalogModel):
    """Lightweight app listing entry."""
    id: str
    name: str
    description: str
    icon: str
    color: str
    group: list[str]
    resource_count: int
    operation_count: int

    @classmethod
    def from_app(cls, app: AppSchema) -> "AppSummary":
        return cls(
            id=app.id,
            name=app.name,
            description=app.description,
            icon=app.icon,
            color=app.color,
            group=list(app.group),
            resource_count=len(app.resources),
            operation_count=app.operation_count,
        )


# ==================== PREPARED REQUESTS ====================


class PrepareRequestBody(CatalogModel):
    """Field values keyed by API name (or field id)."""
    values: dict[str, Any] = Field(default_factory=dict)


class PreparedRequest(CatalogModel):
    """An operation's HTTP call with placeholders filled in. Never sent here."""
    method: HttpMethod
    url: str
    query: dict[str, Any] = Field(default_factory=dict)
    body: dict[str, Any] | None = None
    headers: dict[str, str] = Field(default_factory=dict)
