# bike_inventory/core/__init__.py

"""
Core components shared by every domain package.

- `config.py`: application settings (pydantic-settings).
- `database.py`: async engine and session management (SQLModel + SQLAlchemy).
- `model_base.py` / `schemas.py`: table mixins (id, timestamps, soft delete) and the response envelope.
- `crud_base.py`: generic soft-delete-aware repository.
- `service_base.py`: generic resource service (validation, envelopes, presigned URLs).
- `storage.py` / `uploads.py`: object storage client and the image upload dependency.
- `security.py` / `dependencies.py`: authentication and dependency injection.
- `exceptions.py`: error taxonomy and the JSON error envelope.
- `metrics.py` / `tasks.py`: Prometheus metrics and ARQ background tasks.
"""

__title__ = "Bike Inventory Core"
__version__ = "0.1.0"
__all__ = []
