"""
Shopify payload builders shared by the tests
"""

from unittest.mock import MagicMock


SHOP_URL = "https://popup-test.myshopify.com"


def make_response(body, status_code=200):
    """Fake requests.Response returning the given JSON body"""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    response.text = str(body)
    return response


def product_node(product_id="gid://shopify/Product/1", title="Tote Bag", images=None, variants=None):
    """Raw products.edges[].node as Shopify returns it"""
    if images is None:
        images = ["https://cdn.shopify.com/tote.jpg"]
    if variants is None:
        variants = [("gid://shopify/ProductVariant/11", "Default Title", "25.00", 3)]
    return {
        "id": product_id,
        "title": title,
        "handle": title.lower().replace(" ", "-"),
        "description": f"{title} description",
        "images": {"edges": [{"node": {"url": url, "src": url}} for url in images]},
        "variants": {
            "edges": [
                {"node": {"id": vid, "title": vtitle, "price": price, "inventoryQuantity": qty}}
                for vid, vtitle, price, qty in variants
            ]
        },
    }


def catalog_body(*nodes):
    return {"data": {"products": {"edges": [{"node": node} for node in nodes]}}}


def order_success_body():
    return {
        "data": {
            "orderCreate": {
                "order": {
                    "id": "gid://shopify/Order/1001",
                    "name": "#1001",
                    "email": "ana@example.com",
                    "createdAt": "2025-05-01T10:00:00Z",
                    "shippingAddress": {"city": "Madrid", "provinceCode": "M", "zip": "28013"},
                },
                "userErrors": [],
            }
        }
    }
