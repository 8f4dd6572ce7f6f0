# bike_inventory/domains/ship/__init__.py
