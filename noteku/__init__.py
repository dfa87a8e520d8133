"""
Noteku.

Note content model and persistence/query layer for a personal notes app.

- core/: Configuration, logging, exceptions, database engine
- models/: SQLAlchemy model of the key-value table
- schemas/: Pydantic models (Note, ChecklistItem, Theme, Result)
- repositories/: Key-value stores and the note collection repository
- services/: Content codec, queries, theme, previews, note service
"""

__version__ = "0.1.0"
