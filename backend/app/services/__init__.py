# Services package init
"""
Device Registry Backend — Services Layer
==========================================

What:  Query/mutation layer sitting between routes (HTTP) and the database.
Why:   Routes handle HTTP; services handle SQL, mapping and typed errors.

Service Inventory:
    - DeviceService:   list/get/create/update/delete devices
    - EmployeeService: list/get employees
    - mappers:         pure row → DTO functions shared by both services
"""
