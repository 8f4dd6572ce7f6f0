# bike_inventory/domains/inv/__init__.py
