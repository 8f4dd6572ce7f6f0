# bike_inventory/domains/__init__.py
