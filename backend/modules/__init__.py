"""
Feature modules for the Listkeeper backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's service and repository
- models.py: Pydantic models for rows and request/response bodies
- repository.py: Supabase and in-memory data access
- service.py: Business logic implementation
- routes.py: FastAPI route handlers
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
