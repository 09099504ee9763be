# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the marketplace business logic:
# - models/: Pydantic schemas for the API contract
# - services/: Product and account operations (validation, ownership, CRUD)
# - validation.py: Explicit field validators run before any store write
#
# Services talk to the database only through lib.supabase_client.
# =============================================================================
