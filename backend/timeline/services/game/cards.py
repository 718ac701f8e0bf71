from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Union

from .errors import CardValidationError

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


def to_instant(value: Union[date, datetime, str]) -> datetime:
    """Normalise a date, datetime or ISO string to a naive UTC datetime.

    Plain dates map to midnight. Raises CardValidationError when the value
    cannot be parsed.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise CardValidationError(f"Invalid date: {value!r}") from None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise CardValidationError(f"Invalid date: {value!r}")


@dataclass(frozen=True)
class EventCard:
    """A historical event as seen by the placement engine."""

    id: Union[int, str]
    title: str
    date_occurred: datetime
    category: str
    difficulty: int = 1
    description: Optional[str] = None

    @property
    def year(self) -> int:
        return self.date_occurred.year

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'EventCard':
        """Build a card from request data, accepting camelCase or snake_case dates."""
        if not isinstance(data, Mapping):
            raise CardValidationError('Card must be an object')

        card_id = data.get('id')
        if card_id is None or isinstance(card_id, bool):
            raise CardValidationError('Card id is required')

        title = data.get('title')
        if not isinstance(title, str) or not title.strip():
            raise CardValidationError('Card title is required')

        category = data.get('category')
        if not isinstance(category, str) or not category.strip():
            raise CardValidationError('Card category is required')

        raw_date = data.get('dateOccurred', data.get('date_occurred'))
        if raw_date is None:
            raise CardValidationError('Card dateOccurred is required')

        difficulty = data.get('difficulty', MIN_DIFFICULTY)
        if isinstance(difficulty, bool) or not isinstance(difficulty, int):
            raise CardValidationError('Card difficulty must be an integer')
        if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
            raise CardValidationError(
                f"Card difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}"
            )

        description = data.get('description')
        if description is not None and not isinstance(description, str):
            raise CardValidationError('Card description must be a string')

        return cls(
            id=card_id,
            title=title.strip(),
            date_occurred=to_instant(raw_date),
            category=category.strip(),
            difficulty=difficulty,
            description=description,
        )

    def to_dict(self) -> dict:
        occurred = self.date_occurred
        if occurred.time() == datetime.min.time():
            occurred_text = occurred.date().isoformat()
        else:
            occurred_text = occurred.isoformat()
        return {
            'id': self.id,
            'title': self.title,
            'dateOccurred': occurred_text,
            'category': self.category,
            'difficulty': self.difficulty,
            'description': self.description,
        }
