"""
Pydantic schema definitions for entity records and API payloads.

Each entity kind defines a ``*Create`` payload, the stored record and,
where the entity can be updated, a ``*Patch`` with every field
optional.  Responses serialize with camelCase aliases.
"""
