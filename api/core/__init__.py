"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource package uses
(settings, logging, error envelope, DB pool, the user-scoped store).
Keep resource-specific SQL and rules in the resource package (e.g. `notes/`).
"""
