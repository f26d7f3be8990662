# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# HTTP layer of the marketplace API:
# - main.py: app factory wiring (middleware, handlers, routers, /storage)
# - config.py: settings from the environment
# - exceptions.py: error envelope and exception handlers
# - auth/: bearer token verification and the admin gate
# - routers/: brand, car, payment and health endpoints
#
# Routers stay thin and hand work to the services in core/.
# =============================================================================
