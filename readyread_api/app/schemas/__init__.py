"""
Pydantic schema definitions for API payloads.

Each resource defines a record schema (what is stored and returned)
and one DTO per write operation.  DTOs carry the validation rules and
are separate from the records so that clients can never set ids or
server‑assigned fields.  Field names are snake_case in Python and
camelCase on the wire.
"""
