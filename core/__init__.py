# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: Pydantic schemas for data validation
# - services/: Price analysis, investment and user operations
#
# Services receive their collaborators (price feed, wallet, store) as
# arguments, which keeps them testable without a running server.
# =============================================================================
