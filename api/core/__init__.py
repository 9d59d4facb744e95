"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that every resource uses
(DB wiring, schema bootstrap, validation, pagination). Keep resource-specific
SQL and business rules in the corresponding resource package (e.g. `reviews/`).
"""
