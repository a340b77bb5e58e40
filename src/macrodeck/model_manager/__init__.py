"""Generic model infrastructure: persistence and observer management.

- **PydanticPersistence**: Utility for loading/saving Pydantic models to JSON
- **ObserverManager**: Generic thread-safe observer pattern implementation
"""

from macrodeck.model_manager.observer import ObserverManager
from macrodeck.model_manager.persistence import PydanticPersistence

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
]
