"""
individual.py - ancestry_tree individual modeling for GEDCOM data.

This module provides the Individual class for modeling people in a
genealogical record set. It supports:
    - Identity and display name
    - Birth events carrying raw textual dates
    - Family links as spouse and as child (by family xref id)

Module: ancestry_tree.individual
"""

__all__ = ['Individual']

from typing import List, Optional
from ged4py.model import Record

from .life_event import LifeEvent

class Individual:
    """
    Represents an individual in the GEDCOM file.

    Attributes:
        xref_id (str): GEDCOM cross-reference ID.
        name (Optional[str]): Formatted display name.
        birth_events (List[LifeEvent]): Birth events in record order.
        family_spouse (List[str]): FAMS family IDs (as spouse/partner).
        family_child (List[str]): FAMC family IDs (as child).
    """
    __slots__ = ['xref_id',
                 'name',
                 'birth_events',
                 'family_spouse', 'family_child']
    def __init__(self, xref_id: str, name: Optional[str] = None):
        """
        Initialize an Individual with no events and no family links.

        Args:
            xref_id (str): GEDCOM cross-reference ID.
            name (Optional[str]): Formatted display name.
        """
        self.xref_id: str = xref_id
        self.name: Optional[str] = name

        self.birth_events: List[LifeEvent] = []

        self.family_spouse: List[str] = []
        self.family_child: List[str] = []

    def add_birth(self, date_text: Optional[str], place: Optional[str] = None, record: Optional[Record] = None) -> LifeEvent:
        """
        Append a birth event and return it.

        Args:
            date_text (Optional[str]): Raw textual date.
            place (Optional[str]): Birth place.
            record (Optional[Record]): The BIRT record it was read from.
        """
        event = LifeEvent(what='BIRT', date_text=date_text, place=place, record=record)
        self.birth_events.append(event)
        return event

    def dated_birth_events(self) -> List[LifeEvent]:
        """Birth events that carry a non-empty date string, in order."""
        return [event for event in self.birth_events if event.has_date]

    def __str__(self) -> str:
        return f"Individual(id={self.xref_id}, name={self.name})"

    def __repr__(self) -> str:
        return f"[ {self.xref_id} : {self.name} - {self.birth_events} ]"
