"""
Product recommendations for the e-commerce demo.

Products are ranked by cosine similarity between an embedding of the
shopper's preferences and an embedding of each product's text.
"""
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from .catalog import SAMPLE_PRODUCTS, newest_products
from .config import logger

MAX_RECOMMENDATIONS = 5
FALLBACK_COUNT = 4


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors.

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        ValueError: if the vectors differ in length
    """
    a = np.asarray(vec_a, dtype=float).ravel()
    b = np.asarray(vec_b, dtype=float).ravel()
    if a.shape != b.shape:
        raise ValueError(f"Vector length mismatch: {a.size} != {b.size}")

    magnitude = np.linalg.norm(a) * np.linalg.norm(b)
    if magnitude == 0:
        return 0.0
    return float(np.dot(a, b) / magnitude)


def build_preference_text(user_preferences: Optional[str], cart_items: Optional[Iterable[dict]]) -> str:
    """Combine explicit preferences with what is already in the cart."""
    preference_text = user_preferences or ""
    cart_items = list(cart_items or [])

    if cart_items:
        categories = ", ".join(str(item.get("category", "")) for item in cart_items)
        names = ", ".join(str(item.get("name", "")) for item in cart_items)
        preference_text += f" User has shown interest in: {categories}. Products in cart: {names}"

    return preference_text


def product_text(product: dict) -> str:
    return f"{product['name']} {product['description']} {product['category']}"


def rank_products(
    preference_text: str,
    products: List[dict],
    embed: Callable[[str], List[float]],
    limit: int = MAX_RECOMMENDATIONS,
) -> List[dict]:
    """
    Score products against the preference text.

    Args:
        preference_text: Shopper preference string
        products: Candidate products
        embed: Function returning an embedding vector for a string
        limit: Maximum number of recommendations

    Returns:
        List of {productId, score, reason}, best first
    """
    user_embedding = embed(preference_text)

    scores = []
    for product in products:
        similarity = cosine_similarity(user_embedding, embed(product_text(product)))
        scores.append({
            "productId": product["id"],
            "score": similarity,
            "reason": f"Based on your interest in {product['category']}",
        })

    scores.sort(key=lambda s: s["score"], reverse=True)
    return scores[:limit]


def fallback_recommendations(cart_items: Optional[Iterable[dict]] = None) -> List[dict]:
    """
    Recommendations without the embedding service.

    Products sharing a category or tag with the cart come first; with no
    overlap, the newest products are returned.
    """
    cart_items = list(cart_items or [])
    cart_ids = {str(item.get("id")) for item in cart_items if item.get("id") is not None}
    cart_categories = {item.get("category") for item in cart_items if item.get("category")}
    cart_tags = {tag for item in cart_items for tag in (item.get("tags") or [])}

    related = [
        dict(p) for p in SAMPLE_PRODUCTS
        if p["id"] not in cart_ids
        and (p["category"] in cart_categories or cart_tags.intersection(p["tags"]))
    ]
    if related:
        return related[:FALLBACK_COUNT]
    return newest_products(FALLBACK_COUNT, exclude_ids=cart_ids)


def recommend_products(
    user_preferences: Optional[str],
    cart_items: Optional[Iterable[dict]],
    embed: Callable[[str], List[float]],
) -> List[dict]:
    """
    Full product records for the best-matching products not already in the cart.

    Each record gains recommendationScore and recommendationReason.
    """
    cart_items = list(cart_items or [])
    preference_text = build_preference_text(user_preferences, cart_items)

    cart_ids = {str(item.get("id")) for item in cart_items}
    available = [p for p in SAMPLE_PRODUCTS if p["id"] not in cart_ids]

    ranked = rank_products(preference_text, available, embed)
    by_id = {p["id"]: p for p in available}

    results = []
    for rec in ranked:
        product = dict(by_id[rec["productId"]])
        product["recommendationScore"] = rec["score"]
        product["recommendationReason"] = rec["reason"] or "Based on your preferences"
        results.append(product)

    logger.debug(f"Ranked {len(available)} products, returning {len(results)}")
    return results
