# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Sonic Invest API:
# - test_api.py: Endpoint tests through TestClient with in-memory fakes
# - test_models.py: Unit tests for Pydantic model validation
# - test_price_analysis.py: Moving average and risk classification
# - test_coingecko_client.py: Price feed against a mocked HTTP transport
# - test_wallet_service.py: Amount conversion and transfer signing
# - test_user_service.py: User and investment-history business logic
# - test_config.py: Settings validation
#
# Run tests with: pytest
# =============================================================================
