"""Runtime configuration and cart constants."""
import os

# Storefront API used by HttpProductLookup (POST {STOREFRONT_API_URL}/api/products)
STOREFRONT_API_URL = os.environ.get("STOREFRONT_API_URL", "http://localhost:3000")

# Product lookup request timeout in seconds
LOOKUP_TIMEOUT = float(os.environ.get("LOOKUP_TIMEOUT", "5.0"))

# Language used for cart error messages and out-of-stock names (ja | vi | en)
CART_LANGUAGE = os.environ.get("CART_LANGUAGE", "ja")

# Key the storefront persists the cart under
CART_STORAGE_KEY = "vietfood_cart"

# Quantity bounds accepted from the quantity selector
MIN_QUANTITY = 1
MAX_QUANTITY = 99
