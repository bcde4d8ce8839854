from flask import Blueprint, g, jsonify, request

from ..auth import require_auth
from ..catalog import CATEGORIES, CartError, CartService, list_products, parse_quantity
from ..config import logger
from . import error, json_body, state_store

bp = Blueprint("cart", __name__)


def _carts() -> CartService:
    return CartService(state_store())


@bp.route("/products", methods=["GET"])
def products():
    return jsonify({
        "products": list_products(request.args.get("category"), request.args.get("q")),
        "categories": CATEGORIES,
    })


@bp.route("/cart", methods=["GET"])
@require_auth
def get_cart():
    try:
        return jsonify(_carts().items(g.session["userId"]))
    except Exception as e:
        logger.exception(f"Error fetching cart: {e}")
        return error("Failed to fetch cart", 500)


@bp.route("/cart", methods=["POST"])
@require_auth
def add_to_cart():
    try:
        body = json_body()
        product_id = body.get("productId")
        if not product_id:
            return error("Product ID required")

        quantity = parse_quantity(body.get("quantity", 1), "Quantity must be a positive integer")
        item = _carts().add(g.session["userId"], str(product_id), quantity)
        return jsonify(item)
    except CartError as e:
        return error(e.message, e.status)
    except Exception as e:
        logger.exception(f"Error adding to cart: {e}")
        return error("Failed to add to cart", 500)


@bp.route("/cart", methods=["PUT"])
@require_auth
def update_cart():
    try:
        body = json_body()
        product_id = body.get("productId")
        if not product_id or body.get("quantity") is None:
            return error("Missing required fields")

        quantity = parse_quantity(body["quantity"])
        item = _carts().update(g.session["userId"], str(product_id), quantity)
        if item is None:
            return jsonify({"message": "Item removed from cart"})
        return jsonify(item)
    except CartError as e:
        return error(e.message, e.status)
    except Exception as e:
        logger.exception(f"Error updating cart: {e}")
        return error("Failed to update cart", 500)


@bp.route("/cart", methods=["DELETE"])
@require_auth
def remove_from_cart():
    try:
        product_id = request.args.get("productId")
        if not product_id:
            return error("Product ID required")

        _carts().remove(g.session["userId"], product_id)
        return jsonify({"message": "Item removed from cart"})
    except CartError as e:
        return error(e.message, e.status)
    except Exception as e:
        logger.exception(f"Error removing from cart: {e}")
        return error("Failed to remove from cart", 500)
