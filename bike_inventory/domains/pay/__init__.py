# bike_inventory/domains/pay/__init__.py
