"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks (DB wiring, logging). Feature-specific SQL
stays in the feature package (e.g. `books/`).
"""
