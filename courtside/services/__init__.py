"""
Services Package

Domain logic and the screen engine that sits on top of the repositories.

Modules:
- form_engine / forms: editable field forms and their validation rules
- session_service / training_content_service: listing, CRUD, subscriptions
- capabilities: which keys do what, per screen and role
- navigator / snapshot: the screen state machine and its render snapshot
- help_text: keyboard reference
- seed: sample users

Usage:
    from courtside.services import AppState, Navigator, snapshot
    from courtside.services.session_service import SessionFilter
"""

from .navigator import AppState, Navigator
from .snapshot import RenderSnapshot, snapshot

__all__ = [
    "AppState",
    "Navigator",
    "RenderSnapshot",
    "snapshot",
]
