"""Tests for API contract models."""

from datetime import datetime
from uuid import uuid4

import pytest
from pydantic import ValidationError

from switchboard.models.contracts.agents import AgentCreate, AgentPublic, AgentUpdate
from switchboard.models.contracts.billing import (
    CheckoutRequest,
    InvoicePublic,
    SubscriptionStatusResponse,
)
from switchboard.models.contracts.catalog import AppSummary, FieldOption
from switchboard.models.enums import AgentPurpose, BillingCycle, InvoiceStatus, ToneOfVoice


class TestAgentCreate:
    def test_defaults(self):
        agent = AgentCreate(name="Helper")

        assert agent.tone_of_voice == ToneOfVoice.FRIENDLY
        assert agent.purpose == AgentPurpose.SUPPORT
        assert agent.language == "en"
        assert agent.suggested_questions == []

    def test_accepts_camel_case(self):
        agent = AgentCreate.model_validate({"name": "Helper", "websiteUrl": "https://example.com", "toneOfVoice": "formal"})

        assert agent.website_url == "https://example.com"
        assert agent.tone_of_voice == ToneOfVoice.FORMAL

    @pytest.mark.parametrize("name", ["", "x" * 256])
    def test_name_length(self, name):
        with pytest.raises(ValidationError):
            AgentCreate(name=name)

    def test_description_max_length(self):
        AgentCreate(name="ok", description="d" * 1000)
        with pytest.raises(ValidationError):
            AgentCreate(name="ok", description="d" * 1001)

    def test_empty_website_becomes_none(self):
        assert AgentCreate(name="ok", website_url="").website_url is None

    @pytest.mark.parametrize("url", ["example.com", "ftp://example.com", "https://"])
    def test_invalid_website_rejected(self, url):
        with pytest.raises(ValidationError, match="Please enter a valid URL"):
            AgentCreate(name="ok", website_url=url)

    def test_unknown_tone_rejected(self):
        with pytest.raises(ValidationError):
            AgentCreate(name="ok", tone_of_voice="sarcastic")


class TestAgentUpdate:
    def test_only_set_fields_are_dumped(self):
        update = AgentUpdate.model_validate({"isActive": False})
        assert update.model_dump(exclude_unset=True) == {"is_active": False}

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            AgentUpdate.model_validate({"name": "x", "userId": "someone-else"})

    def test_explicit_null_is_kept(self):
        update = AgentUpdate.model_validate({"description": None, "websiteUrl": ""})
        assert update.model_dump(exclude_unset=True) == {"description": None, "website_url": None}


class TestAgentPublic:
    def test_serializes_camel_case(self, make_agent):
        agent = make_agent()

        data = AgentPublic.model_validate(agent).model_dump(by_alias=True, mode="json")

        assert data["id"] == str(agent.id)
        assert data["userId"] == "user-1"
        assert data["toneOfVoice"] == "friendly"
        assert data["isActive"] is True
        assert data["createdAt"] == "2026-01-15T12:00:00"


class TestBillingContracts:
    def test_subscription_defaults_are_free_tier(self):
        data = SubscriptionStatusResponse().model_dump(by_alias=True)

        assert data["hasActiveSubscription"] is False
        assert data["plan"] == "free"
        assert data["messageLimit"] == 100
        assert data["currentPeriodEnd"] is None

    def test_checkout_request_camel_case(self):
        request = CheckoutRequest.model_validate({"planSlug": "pro", "billingCycle": "yearly"})

        assert request.plan_slug == "pro"
        assert request.billing_cycle == BillingCycle.YEARLY

    def test_checkout_request_requires_cycle(self):
        with pytest.raises(ValidationError):
            CheckoutRequest.model_validate({"planSlug": "pro"})

    def test_checkout_request_rejects_unknown_cycle(self):
        with pytest.raises(ValidationError):
            CheckoutRequest.model_validate({"planSlug": "pro", "billingCycle": "weekly"})

    def test_invoice_line_items(self):
        invoice = InvoicePublic(
            id=uuid4(),
            invoice_number="INV-0001",
            period_start=datetime(2026, 1, 1),
            period_end=datetime(2026, 2, 1),
            total=2900,
            status=InvoiceStatus.PAID,
            line_items=[{"description": "Pro Plan", "unitPrice": 2900, "total": 2900}],
            created_at=datetime(2026, 2, 1),
        )

        data = invoice.model_dump(by_alias=True)

        assert data["invoiceNumber"] == "INV-0001"
        assert data["lineItems"][0]["unitPrice"] == 2900
        assert data["paidAt"] is None


class TestCatalogContracts:
    def test_fixed_collection_group(self):
        option = FieldOption.model_validate({
            "name": "filters",
            "displayName": "Filters",
            "values": [{"id": "column", "displayName": "Column", "name": "column", "type": "string"}],
        })

        assert option.value is None
        assert option.values[0].name == "column"

    def test_app_summary_counts(self, catalog):
        app = catalog.get_app("slack")
        summary = AppSummary.from_app(app)

        assert summary.resource_count == len(app.resources)
        assert summary.operation_count == sum(len(r.operations) for r in app.resources)
        assert "resourceCount" in summary.model_dump(by_alias=True)
