# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - brands.py: Brand CRUD endpoints
# - cars.py: Car CRUD and related-car endpoints
# - payments.py: Braintree client token and payment endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import brands
from . import cars
from . import payments

__all__ = [
    "health",
    "brands",
    "cars",
    "payments",
]
