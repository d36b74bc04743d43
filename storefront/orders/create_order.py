"""
Create orders directly against the Shopify Admin API
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from storefront.orders.provinces import get_province_code
from storefront.shared.schemas import OrderInput, OrderResult
from storefront.shopify import ShopifySession, create_session

logger = logging.getLogger(__name__)


CURRENCY = "EUR"
COUNTRY_CODE = "ES"
SHIPPING_AMOUNT = Decimal("4.00")
SHIPPING_TITLE = "Estándar"
TRANSACTION_AMOUNT = Decimal("0.01")
ORDER_NOTE = "Pedido Pop Up"
ORDER_TAGS = ["Pop Up"]

# Placeholders for blank contact fields
DEFAULT_NAME = "Return"
DEFAULT_PHONE = "+34608667749"


ORDER_CREATE_MUTATION = """
    mutation OrderCreate(
      $options: OrderCreateOptionsInput,
      $order: OrderCreateOrderInput!
    ) {
      orderCreate(options: $options, order: $order) {
        order {
          id
          name
          email
          createdAt
          shippingAddress {
            address1
            address2
            city
            countryCode
            firstName
            lastName
            phone
            provinceCode
            zip
          }
        }
        userErrors {
          field
          message
        }
      }
    }
"""


def _money(amount: Decimal) -> Dict[str, Any]:
    return {"shopMoney": {"amount": str(amount), "currencyCode": CURRENCY}}


def _mailing_address(order_input: OrderInput, province_code: str) -> Dict[str, Any]:
    contact = order_input.contact
    return {
        "address1": order_input.address.address1,
        "address2": "",
        "city": order_input.address.city,
        "countryCode": COUNTRY_CODE,
        "firstName": contact.first_name or DEFAULT_NAME,
        "lastName": contact.last_name or DEFAULT_NAME,
        "phone": contact.phone or DEFAULT_PHONE,
        "provinceCode": province_code,
        "zip": order_input.address.zip,
    }


def build_order_variables(order_input: OrderInput, province_code: str) -> Dict[str, Any]:
    """
    Map an order form into orderCreate variables

    Billing and shipping addresses are identical. The order carries a fixed
    standard shipping line and a nominal manual SALE transaction so Shopify
    records it as paid.
    """
    address = _mailing_address(order_input, province_code)

    return {
        "options": {
            "inventoryBehaviour": "DECREMENT_OBEYING_POLICY",
            "sendFulfillmentReceipt": True,
            "sendReceipt": True,
        },
        "order": {
            "billingAddress": dict(address),
            "buyerAcceptsMarketing": True,
            "currency": CURRENCY,
            "email": order_input.contact.email,
            "financialStatus": "PAID",
            "lineItems": [
                {
                    "variantId": item.variant_id,
                    "quantity": item.quantity,
                    "requiresShipping": True,
                }
                for item in order_input.line_items
            ],
            "note": ORDER_NOTE,
            "shippingAddress": dict(address),
            "shippingLines": [
                {
                    "priceSet": _money(SHIPPING_AMOUNT),
                    "title": SHIPPING_TITLE,
                }
            ],
            "tags": list(ORDER_TAGS),
            "taxesIncluded": True,
            "test": False,
            "transactions": [
                {
                    "amountSet": _money(TRANSACTION_AMOUNT),
                    "kind": "SALE",
                    "gateway": "manual",
                    "status": "SUCCESS",
                }
            ],
        },
    }


def parse_order_response(body: Dict[str, Any], context: Optional[Dict[str, Any]] = None) -> OrderResult:
    """
    Classify an orderCreate response body

    GraphQL errors, userErrors and missing payloads become failure results;
    they are never raised.
    """
    errors = body.get("errors")
    order_response = (body.get("data") or {}).get("orderCreate")
    user_errors = (order_response or {}).get("userErrors") or []

    if errors or user_errors:
        logger.error(
            f"Order creation failed: errors={errors} userErrors={user_errors} input={context or {}}"
        )

    if errors:
        return OrderResult(success=False, error=errors)

    if not order_response:
        logger.error(f"No orderCreate found in response: {body}")
        return OrderResult(success=False, error="Missing orderCreate field")

    if user_errors:
        return OrderResult(success=False, error=user_errors)

    created_order = order_response.get("order")
    if not created_order:
        logger.error(f"Order not found in response: {body}")
        return OrderResult(success=False, error="Order not found in response")

    return OrderResult(success=True, data=created_order)


def create_order(order_input: OrderInput, session: Optional[ShopifySession] = None) -> OrderResult:
    """
    Submit an order to Shopify

    Args:
        order_input: Contact, address and line items collected by the form
        session: Shopify session. A new one is created from config when omitted

    Returns:
        OrderResult with the created order, or the failure detail

    Raises:
        ConfigurationError: if Shopify credentials are missing
        TransportError: if the HTTP call fails
    """
    session = session or create_session()
    province_code = get_province_code(order_input.address.city)
    variables = build_order_variables(order_input, province_code)

    body = session.post_graphql(
        session.settings.get_orders_url(),
        ORDER_CREATE_MUTATION,
        variables
    )

    result = parse_order_response(
        body,
        context={
            "city": order_input.address.city,
            "province_code": province_code,
            "address": order_input.address.address1,
        }
    )

    if result.success:
        logger.info(f"Created order {result.data.get('name') or result.data.get('id')}")
    return result
