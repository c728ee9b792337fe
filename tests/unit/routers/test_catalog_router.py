"""Tests for the /api/catalog and /api/health endpoints."""


class TestHealth:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Switchboard API"


class TestListApps:
    def test_all_apps(self, client, catalog):
        body = client.get("/api/catalog/apps").json()

        assert len(body) == len(catalog)
        slack = next(app for app in body if app["id"] == "slack")
        assert slack["resourceCount"] > 0
        assert slack["operationCount"] >= slack["resourceCount"]

    def test_search(self, client):
        ids = {app["id"] for app in client.get("/api/catalog/apps", params={"q": "hubspot"}).json()}
        assert "hubspot" in ids
        assert "slack" not in ids

    def test_group_filter(self, client):
        body = client.get("/api/catalog/apps", params={"group": "crm"}).json()

        assert body
        assert all("crm" in [g.lower() for g in app["group"]] for app in body)


class TestGetApp:
    def test_full_schema_uses_camel_case(self, client):
        body = client.get("/api/catalog/apps/slack").json()

        assert body["baseUrl"] == "https://slack.com/api"
        operation = body["resources"][0]["operations"][0]
        assert "optionalFields" in operation
        assert "displayName" in operation["fields"][0]

    def test_unknown_app(self, client):
        response = client.get("/api/catalog/apps/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "App 'nope' not found"


class TestGetOperation:
    def test_by_value(self, client):
        response = client.get("/api/catalog/apps/hubspot/resources/contact/operations/get")

        assert response.status_code == 200
        assert response.json()["routing"]["request"]["url"] == "/crm/v3/objects/contacts/{contactId}"

    def test_unknown_resource(self, client):
        response = client.get("/api/catalog/apps/hubspot/resources/spaceship/operations/get")
        assert response.status_code == 404

    def test_unknown_operation(self, client):
        response = client.get("/api/catalog/apps/hubspot/resources/contact/operations/teleport")
        assert response.status_code == 404


class TestPrepareRequest:
    def test_prepared(self, client):
        response = client.post(
            "/api/catalog/apps/slack/resources/channel/operations/create_channel/request",
            json={"values": {"name": "launch", "isPrivate": True}},
        )

        assert response.status_code == 200
        assert response.json() == {
            "method": "POST",
            "url": "https://slack.com/api/conversations.create",
            "query": {},
            "body": {"name": "launch", "isPrivate": True},
            "headers": {},
        }

    def test_missing_required_field(self, client):
        response = client.post(
            "/api/catalog/apps/hubspot/resources/contact/operations/get_contact/request",
            json={"values": {}},
        )

        assert response.status_code == 422
        assert "contactId" in response.json()["detail"]

    def test_operation_without_routing(self, client, catalog):
        app = next(
            a for a in catalog.all_apps()
            if any(op.request is None for r in a.resources for op in r.operations)
        )
        resource, operation = next(
            (r, op) for r in app.resources for op in r.operations if op.request is None
        )

        response = client.post(
            f"/api/catalog/apps/{app.id}/resources/{resource.id}/operations/{operation.id}/request",
            json={"values": {}},
        )

        assert response.status_code == 400
