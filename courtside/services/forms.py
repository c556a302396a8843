"""
Concrete forms: session create/edit and training content create/edit.

Field order is the focus ring order. Conversion to the repository payload
happens only after validate() passed; it also checks that the date and
time are real calendar/clock values, which the structural rules do not.
"""
from datetime import datetime
from typing import Optional

from courtside.core.exceptions import ValidationError
from courtside.models import ContentType, SkillLevel, TrainingContent, TrainingSession
from courtside.schemas import SessionFields, TrainingContentFields
from courtside.services.form_engine import (
    EnumField,
    Form,
    NumericField,
    TextField,
    int_range,
    max_length,
    required_length,
    separated_parts,
)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def _optional_text(value: str) -> Optional[str]:
    return value if value else None


class SessionForm(Form):
    """Title -> Description -> Date -> Time -> Duration -> Level -> back to Title."""

    def __init__(self):
        super().__init__(
            fields=[
                TextField("title", "Title"),
                TextField("description", "Description"),
                TextField("scheduled_date", "Date (YYYY-MM-DD)"),
                TextField("scheduled_time", "Time (HH:MM)"),
                NumericField("duration_minutes", "Duration (minutes)"),
                EnumField.of("skill_level", "Skill Level", SkillLevel),
            ],
            rules=[
                required_length("title", "Title", 3, 100),
                max_length("description", "Description", 500),
                separated_parts("scheduled_date", "-", 3, "Date format should be YYYY-MM-DD"),
                separated_parts("scheduled_time", ":", 2, "Time format should be HH:MM"),
                int_range("duration_minutes", "Duration", 5, 480),
            ],
        )

    @classmethod
    def from_session(cls, session: TrainingSession) -> "SessionForm":
        """Edit form pre-populated with the session's current values."""
        form = cls()
        form.set_value("title", session.title)
        form.set_value("description", session.description or "")
        if session.scheduled_date is not None:
            form.set_value("scheduled_date", session.scheduled_date.strftime(DATE_FORMAT))
        if session.scheduled_time is not None:
            form.set_value("scheduled_time", session.scheduled_time.strftime(TIME_FORMAT))
        if session.duration_minutes is not None:
            form.set_value("duration_minutes", session.duration_minutes)
        form.set_value("skill_level", session.level or SkillLevel.BEGINNER)
        return form

    def to_fields(self) -> SessionFields:
        self.validate()

        scheduled_date = None
        date_text = self.text("scheduled_date")
        if date_text:
            try:
                scheduled_date = datetime.strptime(date_text, DATE_FORMAT).date()
            except ValueError:
                raise ValidationError(
                    "Date must be a valid calendar date (YYYY-MM-DD)", field="scheduled_date"
                )

        scheduled_time = None
        time_text = self.text("scheduled_time")
        if time_text:
            try:
                scheduled_time = datetime.strptime(time_text, TIME_FORMAT).time()
            except ValueError:
                raise ValidationError(
                    "Time must be a valid clock time (HH:MM)", field="scheduled_time"
                )

        duration = self.value("duration_minutes")
        return SessionFields(
            title=self.text("title"),
            description=_optional_text(self.value("description")),
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            duration_minutes=int(duration) if duration else None,
            skill_level=self.value("skill_level"),
        )


class TrainingContentForm(Form):
    """Title -> Description -> Duration -> Content Type -> back to Title."""

    def __init__(self):
        super().__init__(
            fields=[
                TextField("title", "Title"),
                TextField("description", "Description"),
                NumericField("duration_minutes", "Duration (minutes)"),
                EnumField.of("content_type", "Content Type", ContentType),
            ],
            rules=[
                required_length("title", "Title", 2, 100),
                max_length("description", "Description", 500),
                int_range("duration_minutes", "Duration", 1, 480),
            ],
        )

    @classmethod
    def from_content(cls, content: TrainingContent) -> "TrainingContentForm":
        form = cls()
        form.set_value("title", content.title)
        form.set_value("description", content.description or "")
        if content.duration_minutes is not None:
            form.set_value("duration_minutes", content.duration_minutes)
        form.set_value("content_type", content.kind)
        return form

    def to_fields(self) -> TrainingContentFields:
        self.validate()
        duration = self.value("duration_minutes")
        return TrainingContentFields(
            title=self.text("title"),
            description=_optional_text(self.value("description")),
            duration_minutes=int(duration) if duration else None,
            content_type=self.value("content_type"),
        )
