"""
Field form engine.

A form is a fixed ring of named fields with exactly one field focused.
Text and numeric fields edit a string buffer; enum fields hold one member
of an Enum and change only by cycling. Validation runs on explicit submit
and stops at the first failing rule.

No I/O happens here.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type

from courtside.core.exceptions import ValidationError

# ASCII only; int() rejects other Unicode digits such as "²"
DIGITS = frozenset("0123456789")


class FieldKind(str, Enum):
    TEXT = "text"
    NUMERIC = "numeric"
    ENUM = "enum"


@dataclass
class TextField:
    name: str
    label: str
    value: str = ""

    kind = FieldKind.TEXT

    def accepts(self, ch: str) -> bool:
        return ch.isprintable()

    def insert_char(self, ch: str) -> bool:
        if not self.accepts(ch):
            return False
        self.value += ch
        return True

    def delete_char(self) -> None:
        self.value = self.value[:-1]

    def display(self) -> str:
        return self.value


@dataclass
class NumericField(TextField):
    """Digits only. Anything else is dropped without complaint."""

    kind = FieldKind.NUMERIC

    def accepts(self, ch: str) -> bool:
        return ch in DIGITS


@dataclass
class EnumField:
    name: str
    label: str
    options: Tuple[Enum, ...]
    value: Optional[Enum] = None

    kind = FieldKind.ENUM

    def __post_init__(self):
        if not self.options:
            raise ValueError(f"Enum field {self.name} needs at least one option")
        if self.value is None:
            self.value = self.options[0]

    @classmethod
    def of(cls, name: str, label: str, enum_cls: Type[Enum], value: Optional[Enum] = None) -> "EnumField":
        return cls(name=name, label=label, options=tuple(enum_cls), value=value)

    def cycle_next(self) -> None:
        idx = self.options.index(self.value)
        self.value = self.options[(idx + 1) % len(self.options)]

    def cycle_prev(self) -> None:
        idx = self.options.index(self.value)
        self.value = self.options[(idx - 1) % len(self.options)]

    def display(self) -> str:
        return str(self.value.value).capitalize()


FormField = TextField | EnumField

# A rule returns (field name, message) when it fails and None when it passes.
Rule = Callable[["Form"], Optional[Tuple[str, str]]]


class Form:
    """Ordered ring of fields plus the index of the focused one."""

    def __init__(self, fields: Sequence[FormField], rules: Sequence[Rule] = ()):
        if not fields:
            raise ValueError("A form needs at least one field")
        names = [f.name for f in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate field names: {names}")
        self.fields: List[FormField] = list(fields)
        self.rules: List[Rule] = list(rules)
        self.focus_index = 0
        self._by_name: Dict[str, FormField] = {f.name: f for f in self.fields}

    # --- focus ---

    @property
    def focused(self) -> FormField:
        return self.fields[self.focus_index]

    @property
    def focused_name(self) -> str:
        return self.focused.name

    def next_field(self) -> None:
        self.focus_index = (self.focus_index + 1) % len(self.fields)

    def prev_field(self) -> None:
        self.focus_index = (self.focus_index - 1) % len(self.fields)

    def focus(self, name: str) -> None:
        self.focus_index = self.fields.index(self._by_name[name])

    # --- editing ---

    def insert_char(self, ch: str) -> bool:
        """Append to the focused buffer. Enum fields take no free text."""
        target = self.focused
        if isinstance(target, EnumField):
            return False
        return target.insert_char(ch)

    def delete_char(self) -> None:
        """Backspace. Only ever edits text; on an enum field it does nothing."""
        target = self.focused
        if isinstance(target, TextField):
            target.delete_char()

    def cycle_next(self) -> None:
        target = self.focused
        if isinstance(target, EnumField):
            target.cycle_next()

    def cycle_prev(self) -> None:
        target = self.focused
        if isinstance(target, EnumField):
            target.cycle_prev()

    # --- values ---

    def field(self, name: str) -> FormField:
        return self._by_name[name]

    def value(self, name: str):
        return self._by_name[name].value

    def text(self, name: str) -> str:
        """Buffer of a text field with surrounding whitespace removed."""
        return str(self._by_name[name].value).strip()

    def set_value(self, name: str, value) -> None:
        target = self._by_name[name]
        if isinstance(target, EnumField):
            if value not in target.options:
                raise ValueError(f"{value!r} is not an option of {name}")
            target.value = value
        else:
            target.value = "" if value is None else str(value)

    def values(self) -> Dict[str, object]:
        return {f.name: f.value for f in self.fields}

    # --- validation ---

    def first_error(self) -> Optional[Tuple[str, str]]:
        """(field name, message) of the first failing rule, or None."""
        for rule in self.rules:
            failure = rule(self)
            if failure is not None:
                return failure
        return None

    def validate(self) -> None:
        failure = self.first_error()
        if failure is not None:
            name, message = failure
            raise ValidationError(message, field=name)


# ---------------------------------------------------------------------------
# Rule builders
# ---------------------------------------------------------------------------

def required_length(name: str, label: str, min_len: int, max_len: int) -> Rule:
    def rule(form: Form):
        value = form.text(name)
        if not value:
            return name, f"{label} is required"
        if len(value) < min_len:
            return name, f"{label} must be at least {min_len} characters"
        if len(value) > max_len:
            return name, f"{label} must be less than {max_len} characters"
        return None
    return rule


def max_length(name: str, label: str, max_len: int) -> Rule:
    def rule(form: Form):
        if len(form.value(name)) > max_len:
            return name, f"{label} must be less than {max_len} characters"
        return None
    return rule


def separated_parts(name: str, separator: str, parts: int, message: str) -> Rule:
    """Structural check only: the buffer splits into exactly `parts` pieces."""
    def rule(form: Form):
        value = form.value(name)
        if not value:
            return None
        if separator not in value or len(value.split(separator)) != parts:
            return name, message
        return None
    return rule


def int_range(name: str, label: str, low: int, high: int, unit: str = "minutes") -> Rule:
    def rule(form: Form):
        value = form.value(name)
        if not value:
            return None
        if not all(ch in DIGITS for ch in value):
            return name, f"{label} must be a number"
        number = int(value)
        if number < low or number > high:
            return name, f"{label} must be between {low} and {high} {unit}"
        return None
    return rule
