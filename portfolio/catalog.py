"""
Product catalog and shopping carts for the e-commerce demo.

Products are a fixed sample catalog. Carts live in the state store under
the "carts" section as {user_id: {product_id: quantity}}.
"""
import re
from typing import Dict, List, Optional

from .state import StateManager

INTEGER_RE = re.compile(r"-?[0-9]+")

CATEGORIES = ["All", "Electronics", "Home", "Furniture", "Fashion"]

SAMPLE_PRODUCTS = [
    {
        "id": "1",
        "name": "Wireless Bluetooth Headphones",
        "description": "Premium noise-canceling headphones with 40-hour battery life and crystal-clear audio.",
        "price": 199.99,
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400",
        "category": "Electronics",
        "rating": 4.8,
        "reviews": 2341,
        "stock": 50,
        "tags": ["audio", "wireless", "bluetooth", "music"],
        "createdAt": "2024-01-02T10:00:00Z",
    },
    {
        "id": "2",
        "name": "Smart Watch Pro",
        "description": "Advanced smartwatch with health monitoring, GPS, and 7-day battery life.",
        "price": 349.99,
        "image": "https://images.unsplash.com/photo-1546868871-7041f2a55e12?w=400",
        "category": "Electronics",
        "rating": 4.6,
        "reviews": 1823,
        "stock": 35,
        "tags": ["wearable", "health", "fitness", "smart"],
        "createdAt": "2024-01-05T10:00:00Z",
    },
    {
        "id": "3",
        "name": "Minimalist Desk Lamp",
        "description": "Modern LED desk lamp with adjustable brightness and color temperature.",
        "price": 79.99,
        "image": "https://images.unsplash.com/photo-1507473885765-e6ed057f782c?w=400",
        "category": "Home",
        "rating": 4.5,
        "reviews": 892,
        "stock": 100,
        "tags": ["lighting", "home", "modern", "led"],
        "createdAt": "2024-01-08T10:00:00Z",
    },
    {
        "id": "4",
        "name": "Mechanical Keyboard RGB",
        "description": "Premium mechanical keyboard with customizable RGB lighting and tactile switches.",
        "price": 149.99,
        "image": "https://images.unsplash.com/photo-1511467687858-23d96c32e4ae?w=400",
        "category": "Electronics",
        "rating": 4.7,
        "reviews": 3421,
        "stock": 75,
        "tags": ["gaming", "typing", "rgb", "mechanical"],
        "createdAt": "2024-01-11T10:00:00Z",
    },
    {
        "id": "5",
        "name": "Ergonomic Office Chair",
        "description": "Full mesh ergonomic chair with lumbar support and adjustable armrests.",
        "price": 399.99,
        "image": "https://images.unsplash.com/photo-1580480055273-228ff5388ef8?w=400",
        "category": "Furniture",
        "rating": 4.4,
        "reviews": 567,
        "stock": 20,
        "tags": ["office", "comfort", "ergonomic", "chair"],
        "createdAt": "2024-01-14T10:00:00Z",
    },
    {
        "id": "6",
        "name": "Portable Power Bank",
        "description": "20000mAh fast-charging power bank with USB-C and wireless charging.",
        "price": 59.99,
        "image": "https://images.unsplash.com/photo-1609091839311-d5365f9ff1c5?w=400",
        "category": "Electronics",
        "rating": 4.3,
        "reviews": 1234,
        "stock": 200,
        "tags": ["mobile", "charging", "portable", "power"],
        "createdAt": "2024-01-17T10:00:00Z",
    },
    {
        "id": "7",
        "name": "Canvas Backpack",
        "description": "Durable canvas backpack with laptop compartment and water-resistant coating.",
        "price": 89.99,
        "image": "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=400",
        "category": "Fashion",
        "rating": 4.6,
        "reviews": 789,
        "stock": 60,
        "tags": ["travel", "laptop", "fashion", "backpack"],
        "createdAt": "2024-01-20T10:00:00Z",
    },
    {
        "id": "8",
        "name": "Smart Home Speaker",
        "description": "Voice-controlled smart speaker with premium sound and home automation.",
        "price": 129.99,
        "image": "https://images.unsplash.com/photo-1543512214-318c7553f230?w=400",
        "category": "Electronics",
        "rating": 4.5,
        "reviews": 2156,
        "stock": 80,
        "tags": ["smart", "voice", "home", "speaker"],
        "createdAt": "2024-01-23T10:00:00Z",
    },
]


class CartError(Exception):
    """Raised for cart operations that the client got wrong."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


def list_products(category: Optional[str] = None, query: Optional[str] = None) -> List[dict]:
    """Filter the catalog by category and a case-insensitive search term."""
    products = SAMPLE_PRODUCTS
    if category and category != "All":
        products = [p for p in products if p["category"].lower() == category.lower()]
    if query:
        needle = query.lower().strip()
        products = [
            p for p in products
            if needle in p["name"].lower()
            or needle in p["description"].lower()
            or any(needle in tag for tag in p["tags"])
        ]
    return [dict(p) for p in products]


def get_product(product_id: str) -> Optional[dict]:
    for product in SAMPLE_PRODUCTS:
        if product["id"] == str(product_id):
            return dict(product)
    return None


def newest_products(limit: int = 4, exclude_ids: Optional[set] = None) -> List[dict]:
    exclude_ids = exclude_ids or set()
    ordered = sorted(SAMPLE_PRODUCTS, key=lambda p: p["createdAt"], reverse=True)
    return [dict(p) for p in ordered if p["id"] not in exclude_ids][:limit]


def parse_quantity(value, message: str = "Quantity must be an integer") -> int:
    """Coerce a JSON quantity to int, rejecting bools, floats with fractions and junk."""
    if isinstance(value, bool):
        raise CartError(message)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and INTEGER_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise CartError(message)


class CartService:
    """Per-user carts on top of the state store."""

    def __init__(self, state: StateManager):
        self.state = state

    def _cart(self, user_id: str) -> Dict[str, int]:
        return self.state.section("carts").setdefault(user_id, {})

    def _item(self, user_id: str, product_id: str, quantity: int) -> dict:
        return {
            "userId": user_id,
            "productId": product_id,
            "quantity": quantity,
            "product": get_product(product_id),
        }

    def items(self, user_id: str) -> List[dict]:
        cart = self._cart(user_id)
        return [self._item(user_id, product_id, qty) for product_id, qty in cart.items()]

    def add(self, user_id: str, product_id: str, quantity: int = 1) -> dict:
        """
        Add a product to the cart, incrementing an existing line.

        Raises:
            CartError: invalid quantity (400), unknown product (404),
                insufficient stock for the resulting line (400)
        """
        if quantity <= 0:
            raise CartError("Quantity must be a positive integer")

        product = get_product(product_id)
        if product is None:
            raise CartError("Product not found", status=404)

        cart = self._cart(user_id)
        total = cart.get(product["id"], 0) + quantity
        if product["stock"] < total:
            raise CartError("Insufficient stock")

        cart[product["id"]] = total
        self.state.save()
        return self._item(user_id, product["id"], cart[product["id"]])

    def update(self, user_id: str, product_id: str, quantity: int) -> Optional[dict]:
        """
        Set a line's quantity. Zero or less removes the line; more than the
        stock raises CartError.

        Returns:
            The updated item, or None when the line was removed
        """
        cart = self._cart(user_id)
        product_id = str(product_id)

        if quantity <= 0:
            self.remove(user_id, product_id)
            return None

        if product_id not in cart:
            raise CartError("Cart item not found", status=404)

        if get_product(product_id)["stock"] < quantity:
            raise CartError("Insufficient stock")

        cart[product_id] = quantity
        self.state.save()
        return self._item(user_id, product_id, quantity)

    def remove(self, user_id: str, product_id: str):
        cart = self._cart(user_id)
        if str(product_id) not in cart:
            raise CartError("Cart item not found", status=404)
        del cart[str(product_id)]
        self.state.save()
