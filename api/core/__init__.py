"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, error types, logging). Keep entity-specific field lists and
schemas in the corresponding feature package (e.g. `sections/`).
"""
