# bike_inventory/domains/org/__init__.py
