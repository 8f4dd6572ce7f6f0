# bike_inventory/__init__.py

"""
Main package of the Bike Inventory FastAPI application.

The package is split into the `core` subpackage (settings, database,
security, object storage, the generic repository and service layers) and
the `domains` subpackage, one package per business domain.
"""

APP_NAME = "Bike Inventory API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api"  # common prefix of every resource router (applied in main.py)
SERVICE_NAME = "bike-inventory-api"
CICD_MESSAGE = "Congratulations! CI/CD Working!!"

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Inventory and sales management REST backend."
__all__ = []
