from flask import Blueprint, current_app, jsonify

from ..config import logger
from ..recommendations import fallback_recommendations, recommend_products
from . import json_body

bp = Blueprint("recommendations", __name__)


@bp.route("/recommendations", methods=["POST"])
def recommendations():
    body = json_body()
    cart_items = body.get("cartItems") or []
    if not isinstance(cart_items, list):
        cart_items = []
    cart_items = [item for item in cart_items if isinstance(item, dict)]

    try:
        inference = current_app.extensions["portfolio_inference"]
        results = recommend_products(body.get("userPreferences"), cart_items, inference.get_embeddings)
        return jsonify(results)
    except Exception as e:
        logger.error(f"Error getting recommendations: {e}")
        return jsonify(fallback_recommendations(cart_items))
