"""Tests for rendering operation routing templates into prepared requests."""

import pytest

from switchboard.catalog.registry import parse_app_schema
from switchboard.catalog.requests import build_request, join_url, resolve_values
from switchboard.core.exceptions import CatalogError, MissingFieldError
from switchboard.models.enums import HttpMethod


class TestJoinUrl:
    @pytest.mark.parametrize(
        "base_url,url,expected",
        [
            ("https://api.example.com", "/v1/items", "https://api.example.com/v1/items"),
            ("https://api.example.com/", "v1/items", "https://api.example.com/v1/items"),
            (None, "/v1/items", "/v1/items"),
            ("https://api.example.com", "https://other.example.com/x", "https://other.example.com/x"),
        ],
    )
    def test_join(self, base_url, url, expected):
        assert join_url(base_url, url) == expected


class TestResolveValues:
    def test_name_then_id_then_default(self, catalog):
        operation = catalog.get_operation("slack", "channel", "create_channel")

        resolved = resolve_values(operation, {"name": "general", "team_id": "T1", "unknown": "x"})

        assert resolved == {"name": "general", "isPrivate": False, "teamId": "T1"}


class TestBuildRequest:
    def test_path_placeholder_and_query(self, catalog):
        app = catalog.get_app("hubspot")
        operation = app.get_resource("contact").get_operation("get_contact")

        request = build_request(app, operation, {"contactId": "123", "properties": ["email"]})

        assert request.method == HttpMethod.GET
        assert request.url == "https://api.hubapi.com/crm/v3/objects/contacts/123"
        assert request.query == {"properties": ["email"]}
        assert request.body is None

    def test_path_value_is_url_encoded(self, catalog):
        app = catalog.get_app("hubspot")
        operation = app.get_resource("contact").get_operation("get_contact")

        request = build_request(app, operation, {"contact_id": "a/b c"})

        assert request.url.endswith("/contacts/a%2Fb%20c")

    def test_post_values_go_to_body(self, catalog):
        app = catalog.get_app("slack")
        operation = app.get_resource("channel").get_operation("create")

        request = build_request(app, operation, {"name": "launch"})

        assert request.method == HttpMethod.POST
        assert request.url == "https://slack.com/api/conversations.create"
        assert request.query == {}
        assert request.body == {"name": "launch", "isPrivate": False}

    def test_hidden_fields_are_dropped(self, catalog):
        app = catalog.get_app("slack")
        operation = app.get_resource("channel").get_operation("getMany")

        limited = build_request(app, operation, {})
        unlimited = build_request(app, operation, {"returnAll": True})

        assert limited.query["limit"] == 50
        assert "limit" not in unlimited.query
        assert unlimited.query["returnAll"] is True

    def test_absolute_route_ignores_base_url(self, catalog):
        app = catalog.get_app("googleSheets")
        operation = app.get_resource("spreadsheet").get_operation("delete_spreadsheet")

        request = build_request(app, operation, {"spreadsheetId": "abc"})

        assert request.method == HttpMethod.DELETE
        assert request.url == "https://www.googleapis.com/drive/v3/files/abc"

    def test_missing_path_value_raises(self, catalog):
        app = catalog.get_app("hubspot")
        operation = app.get_resource("contact").get_operation("get_contact")

        with pytest.raises(MissingFieldError) as exc_info:
            build_request(app, operation, {"contactId": ""})

        assert exc_info.value.field_name == "contactId"
        assert exc_info.value.operation_id == "get_contact"

    def test_missing_required_body_field_raises(self, catalog):
        app = catalog.get_app("slack")
        operation = app.get_resource("channel").get_operation("create_channel")

        with pytest.raises(MissingFieldError, match="'name'"):
            build_request(app, operation, {})

    def test_empty_required_body_field_raises(self, catalog):
        app = catalog.get_app("slack")
        operation = app.get_resource("channel").get_operation("create_channel")

        with pytest.raises(MissingFieldError, match="'name'"):
            build_request(app, operation, {"name": ""})

    def test_hidden_required_field_is_not_enforced(self):
        app = parse_app_schema("""
id: t
name: T
resources:
  - id: r
    name: R
    value: r
    operations:
      - id: send
        name: Send
        value: send
        fields:
          - {id: mode, displayName: Mode, name: mode, type: options, required: true, default: text,
             options: [{name: Text, value: text}, {name: File, value: file}]}
          - {id: path, displayName: Path, name: path, type: string, required: true,
             displayOptions: {show: {mode: [file]}}}
        routing:
          request: {method: POST, url: "https://example.com/send"}
""")
        operation = app.resources[0].operations[0]

        request = build_request(app, operation, {})

        assert request.body == {"mode": "text"}
        with pytest.raises(MissingFieldError):
            build_request(app, operation, {"mode": "file"})

    def test_operation_without_routing_raises(self):
        app = parse_app_schema("""
id: t
name: T
resources:
  - id: r
    name: R
    value: r
    operations:
      - {id: noop, name: Noop, value: noop}
""")
        with pytest.raises(CatalogError, match="no HTTP routing"):
            build_request(app, app.resources[0].operations[0], {})
