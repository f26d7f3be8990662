# =============================================================================
# core/services/media.py - Image Reference Shaping
# =============================================================================
# Rewrites stored image references on brand / car documents into public
# URLs before they are returned to clients. Works on populated documents:
# a brand's cars and a car's brand are rewritten too.
# =============================================================================

from typing import Any

from lib.utils import DEFAULT_CDN_HOST, rewrite_image_url


def rewrite_car_images(car: dict[str, Any], host: str = DEFAULT_CDN_HOST) -> dict[str, Any]:
    """Return a copy of `car` with its pictures (and a populated brand's) rewritten."""
    car = dict(car)
    car["product_pictures"] = [
        rewrite_image_url(picture, host) for picture in car.get("product_pictures") or []
    ]
    if isinstance(car.get("brand"), dict):
        car["brand"] = rewrite_brand_images(car["brand"], host)
    return car


def rewrite_brand_images(brand: dict[str, Any], host: str = DEFAULT_CDN_HOST) -> dict[str, Any]:
    """Return a copy of `brand` with its picture (and populated cars') rewritten."""
    brand = dict(brand)
    brand["brand_pictures"] = rewrite_image_url(brand.get("brand_pictures"), host)
    brand["cars"] = [
        rewrite_car_images(car, host) if isinstance(car, dict) else car
        for car in brand.get("cars") or []
    ]
    return brand
