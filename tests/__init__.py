# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Marketplace API:
# - test_validation.py: Field validators for products and accounts
# - test_auth.py: Token verification, the bearer gate, account endpoints
# - test_product_service.py: ProductService with a mocked SupabaseClient
# - test_user_service.py: UserService registration with a mocked SupabaseClient
# - test_products_api.py: Product endpoints end-to-end (in-memory store)
# - test_supabase_client.py: Query building and error mapping
# - test_models.py: Response model serialization
# - test_health.py: Health endpoints
#
# Run tests with: pytest
# =============================================================================
