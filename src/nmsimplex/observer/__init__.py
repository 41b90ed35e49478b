"""
Observer module for Nelder-Mead optimization.

Provides the Observer pattern for monitoring:
- HistoryObserver: Record accepted vertices
- PrintObserver: Console output
- CallbackObserver: Forward to a user function
- CompositeObserver: Combine multiple observers
"""

from .observer import (
    CallbackObserver,
    CompositeObserver,
    HistoryObserver,
    Observer,
    PrintObserver,
)

__all__ = [
    "Observer",
    "CompositeObserver",
    "HistoryObserver",
    "CallbackObserver",
    "PrintObserver",
]
