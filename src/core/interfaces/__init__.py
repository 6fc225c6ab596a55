"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the Core depends on abstractions.
"""

from core.interfaces.api import PlaceholderAPI

__all__ = ["PlaceholderAPI"]
