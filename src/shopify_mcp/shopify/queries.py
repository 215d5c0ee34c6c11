"""GraphQL documents sent to the Shopify Admin API.

All caller-supplied values travel as GraphQL variables.  Search strings use
Shopify's search syntax, built by :func:`search_term`.
"""

from __future__ import annotations

PRODUCTS_COUNT = """
query productsCount {
  productsCount {
    count
  }
}
"""

FIND_PRODUCT = """
query findProduct($query: String!) {
  products(first: 1, query: $query) {
    edges {
      node {
        id
        title
        handle
      }
    }
  }
}
"""

DELETE_PRODUCT = """
mutation productDelete($id: ID!) {
  productDelete(input: { id: $id }) {
    deletedProductId
    userErrors {
      field
      message
    }
  }
}
"""

FIND_ORDER = """
query findOrder($query: String!) {
  orders(first: 1, query: $query) {
    edges {
      node {
        id
        name
      }
    }
  }
}
"""

_ADDRESS_FIELDS = """
      firstName
      lastName
      address1
      address2
      city
      province
      country
      zip
      phone
"""

UPDATE_ORDER = f"""
mutation orderUpdate($input: OrderInput!) {{
  orderUpdate(input: $input) {{
    order {{
      id
      name
      shippingAddress {{{_ADDRESS_FIELDS}    }}
      billingAddress {{{_ADDRESS_FIELDS}    }}
    }}
    userErrors {{
      field
      message
    }}
  }}
}}
"""


def search_term(field: str, value: str) -> str:
    """Build a single-quoted Shopify search term, e.g. ``title:'Blue Shirt'``.

    Backslashes and single quotes inside *value* are backslash-escaped.
    """
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"{field}:'{escaped}'"
