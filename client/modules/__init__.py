"""
Feature modules for the Unibro client.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Client-side logic over the backend API
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
