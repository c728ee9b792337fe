"""
Enumeration types used across the application.

Catalog enums keep the camelCase spellings used in the integration
schema files so YAML values map onto members directly.
"""

from enum import Enum


# ==================== CATALOG ====================


class FieldType(str, Enum):
    """Integration field input types (n8n core types)"""
    STRING = "string"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OPTIONS = "options"
    MULTI_OPTIONS = "multiOptions"
    JSON = "json"
    DATE_TIME = "dateTime"
    COLOR = "color"
    COLLECTION = "collection"
    FIXED_COLLECTION = "fixedCollection"
    RESOURCE_LOCATOR = "resourceLocator"


class CredentialType(str, Enum):
    """How an integration authenticates"""
    OAUTH2 = "oAuth2"
    API_KEY = "apiKey"
    SERVICE_ACCOUNT = "serviceAccount"
    BASIC = "basic"
    CONNECTION_STRING = "connectionString"
    CUSTOM = "custom"


class CredentialFieldType(str, Enum):
    """Credential form input types"""
    STRING = "string"
    PASSWORD = "password"
    HIDDEN = "hidden"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"
    OPTIONS = "options"


class HttpMethod(str, Enum):
    """HTTP methods allowed in operation routing templates"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# ==================== AGENTS ====================


class AgentType(str, Enum):
    """Channel an agent is deployed to"""
    WEBSITE = "website"
    WHATSAPP = "whatsapp"


class ToneOfVoice(str, Enum):
    """Agent tone of voice choices shown on the edit form"""
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    CASUAL = "casual"
    FORMAL = "formal"
    ENTHUSIASTIC = "enthusiastic"
    EMPATHETIC = "empathetic"


class AgentPurpose(str, Enum):
    """Agent purpose choices shown on the edit form"""
    SALES = "sales"
    SUPPORT = "support"
    INFORMATIONAL = "informational"
    LEAD_GENERATION = "lead_generation"
    BOOKING = "booking"


# ==================== BILLING ====================


class BillingCycle(str, Enum):
    """Subscription billing cycles"""
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SubscriptionStatus(str, Enum):
    """User subscription status"""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    PAST_DUE = "past_due"
    PAUSED = "paused"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status"""
    DRAFT = "draft"
    OPEN = "open"
    PAID = "paid"
    VOID = "void"
    UNCOLLECTIBLE = "uncollectible"
