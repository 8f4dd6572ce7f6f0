# bike_inventory/domains/ref/__init__.py
