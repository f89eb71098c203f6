"""
Notepad.

- core/: Configuration, logging, exceptions, HTTP client, resilience
- models/: SQLAlchemy models for the local note store
- schemas/: Pydantic note and API envelope schemas
- repositories/: Local and remote note repositories
- state/: Form, note list and application shell controllers
- cli/: Typer command groups
"""
