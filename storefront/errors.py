"""
Error taxonomy for the storefront
"""

from typing import Any, List, Optional


class StorefrontError(Exception):
    """Base class for every error raised by the storefront"""


class ConfigurationError(StorefrontError):
    """A required environment value is missing"""


class TransportError(StorefrontError):
    """Shopify could not be reached or answered with a non-success status"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GraphQLQueryError(StorefrontError):
    """Shopify reported GraphQL-level errors for a query"""

    def __init__(self, message: str, errors: List[Any]):
        super().__init__(message)
        self.errors = errors


class StockLimitExceeded(StorefrontError):
    """A cart change would exceed the variant's known inventory"""

    def __init__(self, variant_id: str, requested: int, available: int):
        super().__init__(
            f"Only {available} units available for variant {variant_id} (requested {requested})"
        )
        self.variant_id = variant_id
        self.requested = requested
        self.available = available


class FormValidationError(StorefrontError):
    """The order form is not complete enough to submit"""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []
