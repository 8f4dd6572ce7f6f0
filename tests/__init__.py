# tests/__init__.py

"""
Test suite of the Bike Inventory API.

- `conftest.py`: shared fixtures (database, mocked bucket, users, clients).
- `core/`: storage, uploads, CRUD base and worker tasks.
- `domains/`: HTTP tests per business domain (usr, org, inv, pay, ship).
"""

__title__ = "Bike Inventory API Tests"
__version__ = "0.1.0"
__all__ = []
