# bike_inventory/domains/sal/__init__.py
