"""
life_event.py - ancestry_tree life event modeling for GEDCOM data.

This module provides the LifeEvent class used to carry the raw event data
(birth events in particular) from the GEDCOM loader to the date inference
engine. It supports:
    - Keeping the textual GEDCOM date exactly as it will be interpreted
    - Recording the event tag and place

Module: ancestry_tree.life_event
"""

from typing import Optional
from ged4py.model import Record

class LifeEvent:
    """
    Represents a life event (birth, death, etc.) for an individual.

    Attributes:
        what (str): The type of event (e.g., 'BIRT').
        date_text (Optional[str]): The textual GEDCOM date (e.g. 'ABT 1780/81').
        place (Optional[str]): The place where the event occurred.
        record (Optional[Record]): The GEDCOM record associated with the event.
    """
    __slots__ = [
        'what',
        'date_text',
        'place',
        'record'
    ]
    def __init__(self, what: str = '', date_text: Optional[str] = None, place: Optional[str] = None, record: Optional[Record] = None):
        """
        Initialize a LifeEvent instance.

        Args:
            what (str): Type of event (e.g., 'BIRT').
            date_text (Optional[str]): Raw textual date of the event.
            place (Optional[str]): Place of the event.
            record (Optional[Record]): GEDCOM record.
        """
        self.what: str = what
        self.date_text: Optional[str] = date_text
        self.place: Optional[str] = place
        self.record: Optional[Record] = record

    @property
    def has_date(self) -> bool:
        """True when the event carries a non-empty date string."""
        return bool(self.date_text)

    def __repr__(self) -> str:
        if self.place:
            return f"[ {self.what} : {self.date_text} at {self.place} ]"
        return f"[ {self.what} : {self.date_text} ]"

    def __str__(self) -> str:
        return f"{self.what} {self.date_text or ''}".strip()
