# bike_inventory/domains/usr/__init__.py
