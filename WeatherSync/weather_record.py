"""The shared weather record - generated content plus the calendar snapshot it belongs to."""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from time_snapshot import TimeSnapshot


@dataclass
class WeatherRecord:
    """
    Authoritative shared state.

    The content is opaque to this project: whatever the generator returned
    (climate parameters plus derived descriptive fields). The snapshot is
    kept alongside so the next time update can be compared without another
    store round trip.
    """
    content: Dict[str, Any] = field(default_factory=dict)
    snapshot: Optional[TimeSnapshot] = None

    def with_snapshot(self, snapshot: Optional[TimeSnapshot]) -> "WeatherRecord":
        return WeatherRecord(content=copy.deepcopy(self.content), snapshot=snapshot)

    def with_content(self, content: Dict[str, Any]) -> "WeatherRecord":
        return WeatherRecord(content=copy.deepcopy(content), snapshot=self.snapshot)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the whole record as a single store value."""
        return {
            "content": copy.deepcopy(self.content),
            "date": self.snapshot.to_dict() if self.snapshot is not None else None,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "WeatherRecord":
        """
        Rebuild a record from its stored form.

        Raises:
            ValueError: If the stored value isn't a record
        """
        if not isinstance(raw, dict):
            raise ValueError(f"Stored weather record must be an object, got {type(raw).__name__}")
        content = raw.get("content")
        if not isinstance(content, dict):
            raise ValueError("Stored weather record is missing its 'content' object")
        return cls(content=copy.deepcopy(content), snapshot=TimeSnapshot.from_dict(raw.get("date")))
