"""Protocol definitions for domain-specific observer patterns.

- Events: key and binding events
- Observers: protocols for components that react to these events
"""

from .events import BindingEvent, KeyEvent
from .observers import BindingObserver, KeyObserver

__all__ = [
    # Events
    "BindingEvent",
    "KeyEvent",
    # Observers
    "BindingObserver",
    "KeyObserver",
]
