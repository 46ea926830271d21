"""
Tests for cart models
"""

import json
import pytest
from decimal import Decimal
from vietfood.cart import CartLineItem, CartState, ProductSnapshot, VariantSnapshot


def make_product(**overrides):
    data = {
        "id": "prod-pho",
        "sku": "VF-001",
        "name": "フォー（乾麺）",
        "price": 450,
        "stock_quantity": 3,
        "name_vi": "Phở khô",
    }
    data.update(overrides)
    return ProductSnapshot(**data)


class TestSnapshots:
    """Tests for product / variant snapshots."""

    def test_from_product(self, sample_product):
        """Test snapshotting a catalog product."""
        snapshot = ProductSnapshot.from_product(sample_product)

        assert snapshot.id == "prod-pho"
        assert snapshot.price == Decimal("450")
        assert snapshot.stock_quantity == 3
        assert snapshot.category_name == "麺類"
        assert snapshot.image_url == "https://cdn.test/pho.jpg"

    def test_from_variant(self, sample_variant_product):
        """Test snapshotting a variant."""
        variant = sample_variant_product.find_variant("var-500g")
        snapshot = VariantSnapshot.from_variant(variant)

        assert snapshot.value == "500g"
        assert snapshot.price_modifier == Decimal("800")
        assert snapshot.stock_quantity == 2

    def test_price_normalized_to_decimal(self):
        """Test float prices are converted without precision loss."""
        snapshot = make_product(price=450.0)
        assert isinstance(snapshot.price, Decimal)
        assert snapshot.price == Decimal("450.0")


class TestCartLineItem:
    """Tests for CartLineItem."""

    def test_unit_price_without_variant(self):
        """Test unit price equals product price."""
        item = CartLineItem(id="line-1", product_id="prod-pho", quantity=2, product=make_product())

        assert item.unit_price == 450
        assert item.line_total == 900
        assert item.stock_snapshot == 3

    def test_unit_price_with_variant(self):
        """Test variant modifier is added to the base price."""
        item = CartLineItem(
            id="line-1",
            product_id="prod-coffee",
            quantity=3,
            product=make_product(id="prod-coffee", price=1200, stock_quantity=10),
            variant_id="var-500g",
            variant=VariantSnapshot(id="var-500g", name="容量", value="500g", price_modifier=800, stock_quantity=2),
        )

        assert item.unit_price == 2000
        assert item.line_total == 6000
        # Variant stock wins over product stock
        assert item.stock_snapshot == 2

    def test_display_name(self):
        """Test localized name with Japanese fallback."""
        item = CartLineItem(id="line-1", product_id="prod-pho", quantity=1, product=make_product())
        no_vi = CartLineItem(id="line-2", product_id="p2", quantity=1, product=make_product(id="p2", name_vi=None))

        assert item.display_name("ja") == "フォー（乾麺）"
        assert item.display_name("vi") == "Phở khô"
        assert no_vi.display_name("vi") == "フォー（乾麺）"

    def test_matches(self):
        """Test (product, variant) matching treats None as its own variant."""
        item = CartLineItem(id="line-1", product_id="prod-pho", quantity=1, product=make_product())

        assert item.matches("prod-pho", None)
        assert not item.matches("prod-pho", "var-1")
        assert not item.matches("prod-other", None)

    def test_to_dict(self):
        """Test serialization to the storefront shape."""
        item = CartLineItem(id="line-1", product_id="prod-pho", quantity=2, product=make_product())

        data = item.to_dict()
        assert data["productId"] == "prod-pho"
        assert data["productVariantId"] is None
        assert data["product"]["nameJa"] == "フォー（乾麺）"
        assert data["product"]["price"] == 450
        assert data["productVariant"] is None
        # Must be JSON-compatible
        json.dumps(data)

    def test_from_dict(self):
        """Test deserialization of a persisted line."""
        data = {
            "id": "prod-coffee-var-500g-1700000000000",
            "productId": "prod-coffee",
            "productVariantId": "var-500g",
            "quantity": 2,
            "product": {
                "id": "prod-coffee",
                "sku": "VF-002",
                "nameJa": "ベトナムコーヒー",
                "nameVi": "Cà phê Việt Nam",
                "price": 1200,
                "stockQuantity": 10,
                "images": [{"imageUrl": "https://cdn.test/coffee.jpg", "altText": None}],
                "category": {"nameJa": "飲料", "nameVi": "Đồ uống"},
            },
            "productVariant": {
                "id": "var-500g",
                "name": "容量",
                "value": "500g",
                "priceModifier": 800,
                "stockQuantity": 2,
            },
        }

        item = CartLineItem.from_dict(data)
        assert item.variant_id == "var-500g"
        assert item.unit_price == 2000
        assert item.product.category_name_vi == "Đồ uống"
        assert item.product.image_url == "https://cdn.test/coffee.jpg"

    def test_from_dict_missing_product(self):
        """Test corrupted data raises KeyError."""
        with pytest.raises(KeyError):
            CartLineItem.from_dict({"id": "x", "productId": "p", "quantity": 1})


class TestCartState:
    """Tests for CartState."""

    def test_create_empty_cart(self):
        """Test creating an empty cart."""
        state = CartState()

        assert state.items == ()
        assert state.total_items == 0
        assert state.total_amount == 0
        assert state.is_loading is False
        assert state.error is None

    def test_find_item(self):
        """Test lookup by (product, variant)."""
        item = CartLineItem(id="line-1", product_id="prod-pho", quantity=1, product=make_product())
        state = CartState(items=(item,), total_items=1, total_amount=Decimal("450"))

        assert state.find_item("prod-pho") is item
        assert state.find_item("prod-pho", "var-1") is None

    def test_serialization_excludes_totals(self):
        """Test only items are persisted."""
        item = CartLineItem(id="line-1", product_id="prod-pho", quantity=1, product=make_product())
        state = CartState(items=(item,), total_items=1, total_amount=Decimal("450"), is_loading=True, error="x")

        data = state.to_dict()
        assert set(data) == {"items"}
        assert len(data["items"]) == 1
