"""
Stocklist Test Suite

Tests are organized by layer:
- test_product_validation.py / test_product_repository.py: pure rules and list operations
- test_inventory_service.py: request handling against an in-memory session store
- test_session_store.py: the Flask session capability
- test_inventory_routes.py: end-to-end requests through the Flask test client
- test_middleware.py, test_config.py, test_logging_config.py: ambient plumbing
"""
