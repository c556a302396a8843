"""
Keyboard reference shown on the Help screen.
"""
from typing import List, Tuple

from courtside.models import UserRole
from courtside.services.capabilities import commands_for
from courtside.services.navigation import ScreenKind

RULE = "═" * 67

HELP_LINES: Tuple[str, ...] = (
    RULE,
    "COURTSIDE - KEYBOARD COMMANDS REFERENCE",
    RULE,
    "",
    "GLOBAL COMMANDS:",
    "  [?] [F1]   Show this help screen ([F1] only while editing a form)",
    "  [q]        Return to home screen (or quit if on home)",
    "  [1]        Jump to home screen",
    "  [Esc]      Return to home screen",
    "",
    "NAVIGATION COMMANDS:",
    "  [2]        Go to Session Management (reloads the list)",
    "  [↑] [k]    Navigate up / Previous item",
    "  [↓] [j]    Navigate down / Next item",
    "  [Enter]    View the selected session",
    "",
    "SESSION LIST COMMANDS (Coach):",
    "  [c]        Create new session",
    "  [e]        Edit selected session",
    "  [d]        Delete selected session",
    "",
    "SESSION LIST COMMANDS (Player):",
    "  [s]        Subscribe/Unsubscribe to session",
    "  [f]        Toggle filter: My Subscriptions vs All Available",
    "",
    "SESSION DETAIL COMMANDS (Coach):",
    "  [e]        Edit this session",
    "  [d]        Delete this session",
    "  [t]        Add training content",
    "  [r]        Edit selected training content",
    "  [x]        Delete selected training content",
    "",
    "SESSION DETAIL COMMANDS (Player):",
    "  [s]        Subscribe/Unsubscribe",
    "  [m]        Mark session as completed",
    "",
    "SESSION DETAIL DISPLAY:",
    "  View all session information including:",
    "  - Session title, description, date, time, duration",
    "  - Skill level and subscription status",
    "  - Training content (drills, exercises, warmups, cooldowns)",
    "  - Estimated duration from training activities",
    "",
    "FORM EDITING COMMANDS:",
    "  [Tab]      Move to next field",
    "  [Shift+Tab] Move to previous field",
    "  [↑] [↓]    Move up/down between fields",
    "  [← →]      Cycle skill level or content type (on those fields)",
    "  [Backspace] Delete last character (text fields only)",
    "  [Enter]    Save form",
    "  [Esc]      Cancel without saving",
    "",
    "DELETION COMMANDS:",
    "  [y]        Confirm deletion",
    "  [n]        Cancel deletion",
    "  [Esc]      Cancel deletion",
    "",
    "SESSION FIELDS:",
    "  Title              Required: 3-100 characters",
    "  Description        Optional: max 500 characters",
    "  Date               Format: YYYY-MM-DD (optional)",
    "  Time               Format: HH:MM (optional)",
    "  Duration           Range: 5-480 minutes (optional)",
    "  Skill Level        Choose: Beginner, Intermediate, or Advanced",
    "",
    "TRAINING CONTENT FIELDS:",
    "  Title              Required: 2-100 characters",
    "  Description        Optional: max 500 characters",
    "  Duration           Range: 1-480 minutes (optional)",
    "  Content Type       Choose: Drill, Exercise, Warmup, or Cooldown",
    "",
    RULE,
    "Press [q] or [Esc] to close help and return to the home screen",
    RULE,
)


def help_lines() -> List[str]:
    return list(HELP_LINES)


def max_scroll(visible_rows: int) -> int:
    """Largest scroll offset that still fills a window of visible_rows."""
    return max(0, len(HELP_LINES) - max(1, visible_rows))


def format_commands(kind: ScreenKind, role: UserRole) -> List[str]:
    """Contextual command list for one screen, as aligned text lines."""
    commands = commands_for(kind, role)
    if not commands:
        return []
    width = max(len(keys) for keys, _ in commands)
    return [f"{keys.ljust(width)}  {description}" for keys, description in commands]
