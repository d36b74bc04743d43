"""
Fetch the active product catalog from the Shopify Admin GraphQL API
"""

import logging
from typing import Any, Dict, List, Optional

from storefront.errors import GraphQLQueryError
from storefront.shared.schemas import Product, ProductImage, Variant
from storefront.shopify import ShopifySession, create_session

logger = logging.getLogger(__name__)


PRODUCTS_QUERY = """
    query getProducts {
      products(first: 250, query: "status:ACTIVE") {
        edges {
          node {
            id
            title
            handle
            description
            images(first: 1) {
              edges {
                node {
                  url
                  src: url
                }
              }
            }
            variants(first: 10) {
              edges {
                node {
                  id
                  price
                  title
                  inventoryQuantity
                }
              }
            }
          }
        }
      }
    }
"""


def normalize_product(node: Dict[str, Any]) -> Product:
    """
    Reshape a raw product node into a Product

    The first image's src becomes image.src; products without images get an
    empty string. Variant edges are flattened in their original order.

    Args:
        node: A products.edges[].node object from the GraphQL response

    Returns:
        Normalized Product
    """
    image_edges = (node.get('images') or {}).get('edges') or []
    if image_edges:
        first = image_edges[0]['node']
        image = ProductImage(src=first.get('src') or first.get('url') or '')
    else:
        image = ProductImage(src='')

    variant_edges = (node.get('variants') or {}).get('edges') or []
    variants = [
        Variant(
            id=edge['node']['id'],
            title=edge['node'].get('title') or '',
            price=str(edge['node'].get('price') or '0'),
            inventoryQuantity=edge['node'].get('inventoryQuantity') or 0
        )
        for edge in variant_edges
    ]

    return Product(
        id=node['id'],
        title=node.get('title') or '',
        handle=node.get('handle') or '',
        description=node.get('description') or '',
        image=image,
        variants=variants
    )


def get_products(session: Optional[ShopifySession] = None) -> List[Product]:
    """
    Fetch up to 250 active products with their first image and variants

    Args:
        session: Shopify session. A new one is created from config when omitted

    Returns:
        Products in the order Shopify returned them

    Raises:
        ConfigurationError: if Shopify credentials are missing
        TransportError: if the HTTP call fails
        GraphQLQueryError: if Shopify reports GraphQL errors
    """
    session = session or create_session()

    body = session.post_graphql(session.settings.get_catalog_url(), PRODUCTS_QUERY)

    errors = body.get('errors')
    if errors:
        logger.error(f"GraphQL Errors: {errors}")
        raise GraphQLQueryError("GraphQL query failed", errors)

    edges = ((body.get('data') or {}).get('products') or {}).get('edges') or []
    products = [normalize_product(edge['node']) for edge in edges]

    logger.info(f"Fetched {len(products)} active products from Shopify")
    return products


def filter_available_products(products: List[Product], search_term: str = "") -> List[Product]:
    """Products with at least one variant in stock whose title matches the search term"""
    term = search_term.lower()
    return [
        product for product in products
        if product.has_stock() and term in product.title.lower()
    ]
