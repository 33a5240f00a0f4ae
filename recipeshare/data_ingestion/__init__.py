"""
Seed import package.

Responsibilities:
- Read recipe documents exported from the document store (or the bundled seed file).
- Normalize them into the canonical Recipe record layout.
- Persist the cleaned records locally for the API to load.
"""
