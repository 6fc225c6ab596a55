"""Domain models and entities.

Why:
- Pure, strict data structures live here (Pydantic v2 records, the document).
- The domain knows nothing about HTTP, templates or the CLI.
"""
