"""Pytest configuration and fixtures"""
import asyncio
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("CART_LANGUAGE", "ja")

from vietfood.cart import CartService, InMemoryCartStorage  # noqa: E402
from vietfood.errors import NotFoundError  # noqa: E402
from vietfood.services.models import Product, ProductVariant  # noqa: E402


@pytest.fixture
def sample_product():
    """Plain product without variants (stock 3)"""
    return Product(
        id="prod-pho",
        sku="VF-001",
        name="フォー（乾麺）",
        name_vi="Phở khô",
        price=450,
        stock_quantity=3,
        category_name="麺類",
        category_name_vi="Mì & Phở",
        image_url="https://cdn.test/pho.jpg",
    )


@pytest.fixture
def sample_variant_product():
    """Product sold by weight with one inactive variant"""
    return Product(
        id="prod-coffee",
        sku="VF-002",
        name="ベトナムコーヒー",
        name_vi="Cà phê Việt Nam",
        price=1200,
        stock_quantity=10,
        category_name="飲料",
        category_name_vi="Đồ uống",
        variants=[
            ProductVariant(id="var-250g", name="容量", value="250g", price_modifier=0, stock_quantity=5),
            ProductVariant(id="var-500g", name="容量", value="500g", price_modifier=800, stock_quantity=2),
            ProductVariant(id="var-1kg", name="容量", value="1kg", price_modifier=2000, stock_quantity=9, is_active=False),
        ],
    )


@pytest.fixture
def inactive_product():
    """Product hidden from the storefront"""
    return Product(
        id="prod-nuoc-mam",
        sku="VF-003",
        name="ヌクマム",
        name_vi="Nước mắm",
        price=680,
        stock_quantity=20,
        is_active=False,
    )


@pytest.fixture
def catalog(sample_product, sample_variant_product, inactive_product):
    """Live catalog served by mock_lookup; tests may replace entries"""
    return {p.id: p for p in (sample_product, sample_variant_product, inactive_product)}


@pytest.fixture
def mock_lookup(catalog):
    """Product lookup reading from the catalog fixture"""
    async def fetch_product(product_id):
        if product_id not in catalog:
            raise NotFoundError(f"product {product_id} not found")
        return catalog[product_id]

    lookup = Mock()
    lookup.fetch_product = AsyncMock(side_effect=fetch_product)
    return lookup


class GatedLookup:
    """Lookup that blocks until the test opens the gate."""

    def __init__(self, catalog):
        self.catalog = catalog
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def fetch_product(self, product_id):
        self.started.set()
        await self.gate.wait()
        return self.catalog[product_id]


@pytest.fixture
def gated_lookup(catalog):
    return GatedLookup(catalog)


@pytest.fixture
def storage():
    return InMemoryCartStorage()


@pytest.fixture
def cart_service(mock_lookup, storage):
    """Empty cart in Japanese"""
    return CartService(mock_lookup, storage, lang="ja")


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client"""
    client = Mock()

    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = table_mock
    return client


@pytest.fixture
def mock_redis():
    """Mock sync Upstash Redis client"""
    redis = Mock()
    redis.get.return_value = None
    redis.set.return_value = True
    return redis
