"""
tree_builder.py - Balanced binary ancestry tree construction.

Defines the TreeBuilder class, which composes trunk families (families with
no known ancestors) into one strictly binary tree serialized in a
Newick-like notation:
    - leaves are 'name:age' labels, age in years before today
    - internal nodes are '(left,right)id:0' with ids taken from a NodeCounter
      in the order the nodes are closed

Module: ancestry_tree.tree_builder
"""

import locale
import logging
import re
from datetime import date
from decimal import Decimal, ROUND_HALF_EVEN
from typing import List, Optional, Sequence

from .birth_date import BirthDateMap
from .config import TreeConfig
from .family import Family
from .individual import Individual
from .record_set import RecordSet

logger = logging.getLogger(__name__)

NON_LABEL_CHAR_RE = re.compile(r'[^A-Za-z_]')


class NodeCounter:
    """
    Source of internal node ids, shared by one recursive build.

    Attributes:
        value (int): The id the next internal node will get.
    """
    __slots__ = ['value']

    def __init__(self, start: int = 1) -> None:
        self.value: int = start

    def next(self) -> int:
        """Return the current id and advance."""
        current = self.value
        self.value += 1
        return current


def sanitize_name(name: Optional[str]) -> str:
    """
    Make a display name safe for a tree label.

    Slashes are removed, then every character that is not an ASCII letter or
    underscore becomes an underscore.
    """
    return NON_LABEL_CHAR_RE.sub('_', (name or '').replace('/', ''))


def format_number(value: float, fraction_digits: int = 3) -> str:
    """
    Format a number for the current locale with at most fraction_digits decimals.

    Rounds half-even and drops trailing zeros, so 12.5 stays '12.5' and
    3.0 becomes '3'.
    """
    quantum = Decimal(1).scaleb(-fraction_digits)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_EVEN)
    text = locale.format_string(f'%.{fraction_digits}f', rounded, grouping=True)
    if fraction_digits > 0:
        decimal_point = locale.localeconv()['decimal_point']
        text = text.rstrip('0').rstrip(decimal_point)
    if text in ('-0', ''):
        text = '0'
    return text


class TreeBuilder:
    """
    Builds the ancestry tree literal from trunk families.

    Attributes:
        record_set (RecordSet): Individuals and families.
        birth_dates (BirthDateMap): Inferred birth dates by xref id.
        today (date): Reference date for every age computation.
        config (TreeConfig): Age formatting settings.
        counter (NodeCounter): Internal node id source for the current build.
    """
    __slots__ = [
        'record_set',
        'birth_dates',
        'today',
        'config',
        'counter',
    ]
    def __init__(self, record_set: RecordSet, birth_dates: BirthDateMap, today: Optional[date] = None, config: Optional[TreeConfig] = None) -> None:
        self.record_set = record_set
        self.birth_dates = birth_dates
        self.today: date = today if today is not None else date.today()
        self.config: TreeConfig = config if config is not None else TreeConfig.default()
        self.counter = NodeCounter()

    def elapsed_days(self, born: date) -> int:
        return (self.today - born).days

    def birth_date(self, xref_id: Optional[str]) -> Optional[date]:
        if xref_id is None:
            return None
        return self.birth_dates.get(xref_id)

    def days_ago(self, family: Family) -> int:
        """
        Ranking key of a family: elapsed days since a spouse's birth.

        When both dates are known and the wife was born strictly earlier, the
        husband's value is used; otherwise the wife's. With one known date that
        side is used, with none the key is 0.
        """
        wife_born = self.birth_date(family.wife)
        husband_born = self.birth_date(family.husband)
        if wife_born is not None and husband_born is not None:
            if wife_born < husband_born:
                return self.elapsed_days(husband_born)
            return self.elapsed_days(wife_born)
        elif husband_born is not None:
            return self.elapsed_days(husband_born)
        elif wife_born is not None:
            return self.elapsed_days(wife_born)
        return 0

    def sort_families(self, families: Sequence[Family]) -> List[Family]:
        """Stable sort by days_ago, largest first."""
        return sorted(families, key=self.days_ago, reverse=True)

    def age_label(self, xref_id: str) -> str:
        born = self.birth_date(xref_id)
        if born is None:
            return '0'
        years = self.elapsed_days(born) / self.config.days_per_year
        return format_number(years, self.config.age_fraction_digits)

    def individual_text(self, individual: Optional[Individual]) -> Optional[str]:
        """'name:age' label for an individual, or None for an empty slot."""
        if individual is None:
            return None
        return f"{sanitize_name(individual.name)}:{self.age_label(individual.xref_id)}"

    def build(self, families: Sequence[Family], counter: Optional[NodeCounter] = None) -> str:
        """
        Build the tree literal for an ordered list of families.

        Args:
            families (Sequence[Family]): Families, already in the desired order.
            counter (Optional[NodeCounter]): Id source; a fresh counter starting at 1 if omitted.

        Returns:
            str: The tree literal, without the terminating ';'.
        """
        self.counter = counter if counter is not None else NodeCounter()
        parts: List[str] = []
        self._build_tree(list(families), parts)
        return ''.join(parts)

    def build_trunk(self) -> str:
        """Select, sort and build the trunk families of the record set."""
        return self.build(self.sort_families(self.record_set.trunk_families()))

    def _close_node(self, parts: List[str]) -> None:
        parts.append(f"){self.counter.next()}:0")

    def _build_tree(self, families: List[Family], parts: List[str]) -> None:
        if len(families) >= 2:
            split_point = len(families) // 2
            parts.append('(')
            self._build_tree(families[:split_point], parts)
            parts.append(',')
            self._build_tree(families[split_point:], parts)
            self._close_node(parts)
        elif len(families) == 1:
            self._build_family(families[0], parts)

    def _build_family(self, family: Family, parts: List[str]) -> None:
        husband_text = self.individual_text(self.record_set.individual(family.husband))
        wife_text = self.individual_text(self.record_set.individual(family.wife))
        if husband_text is None and wife_text is None:
            raise ValueError(f"Family {family.xref_id} has neither husband nor wife")

        if family.has_children():
            parts.append('(')
        if husband_text is not None and wife_text is not None:
            parts.append(f"({husband_text},{wife_text}")
            self._close_node(parts)
        else:
            parts.append(husband_text if husband_text is not None else wife_text)

        if family.has_children():
            parts.append(',')
            childs_families: List[Family] = []
            for child in (self.record_set.individual(xref) for xref in family.children):
                if child is not None:
                    childs_families.extend(self.record_set.families_where_spouse(child))
            self._build_tree(childs_families, parts)
            self._close_node(parts)
