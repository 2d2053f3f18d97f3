# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: create_app(), middleware, docs routes, entry point
# - config.py: Environment variable loading and settings
# - exceptions.py: Error classes and exception handlers
# - responses.py / validation.py: Response envelopes and body/query validators
# - routers/: Decorator-routed controllers
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
