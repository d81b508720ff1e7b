# Routes package init
"""
Device Registry Backend — API Routes Package
==============================================

Route Inventory:
    - devices.py:   GET/POST      /api/devices
                    GET/PUT/DELETE /api/devices/{id}
    - employees.py: GET           /api/employees
                    GET           /api/employees/{id}
    - health.py:    GET           /health

Routes are THIN: extract input, call the service, set status code and
headers. Errors are raised as exceptions and formatted by the global
handlers in main.py.
"""
