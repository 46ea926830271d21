"""
VietFood Cart Core

This package contains the storefront's cart and its collaborators:
- cart: reducer, derived totals, storage, CartService
- services: product lookups, catalog models, money helpers
- db: Supabase + Upstash Redis clients
- i18n: Japanese / Vietnamese / English messages
"""
