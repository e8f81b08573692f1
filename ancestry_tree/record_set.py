"""
record_set.py - In-memory genealogical record set.

This module defines the RecordSet class, the read-only view of individuals
and families that the date inference engine and the tree builder work on.
It supports:
    - Lookup of individuals and families by xref id
    - Walking up (families where child, parents) and down (families where spouse)
    - Selecting the trunk families, i.e. families without known ancestors

Module: ancestry_tree.record_set
"""

import logging
from typing import Dict, Iterable, List, Optional

from .family import Family
from .individual import Individual

logger = logging.getLogger(__name__)

class RecordSet:
    """
    Individuals and families of one GEDCOM file.

    Both mappings keep file order, which is the order trunk families are
    found in before sorting.

    Attributes:
        individuals (Dict[str, Individual]): Individuals indexed by xref_id.
        families (Dict[str, Family]): Families indexed by xref_id.
    """
    __slots__ = [
        'individuals',
        'families',
    ]
    def __init__(self, individuals: Optional[Iterable[Individual]] = None, families: Optional[Iterable[Family]] = None) -> None:
        self.individuals: Dict[str, Individual] = {}
        self.families: Dict[str, Family] = {}
        for individual in individuals or []:
            self.individuals[individual.xref_id] = individual
        for family in families or []:
            self.families[family.xref_id] = family

    def __len__(self) -> int:
        return len(self.individuals)

    def individual(self, xref_id: Optional[str]) -> Optional[Individual]:
        """
        Get an Individual by xref id.

        Args:
            xref_id (Optional[str]): The xref id, may be None for an empty family slot.

        Returns:
            Optional[Individual]: The individual, or None if the id is None or unknown.
        """
        if xref_id is None:
            return None
        individual = self.individuals.get(xref_id)
        if individual is None:
            logger.warning(f"Individual '{xref_id}' referenced but not found in record set")
        return individual

    def family(self, xref_id: str) -> Optional[Family]:
        family = self.families.get(xref_id)
        if family is None:
            logger.warning(f"Family '{xref_id}' referenced but not found in record set")
        return family

    def families_where_spouse(self, individual: Individual) -> List[Family]:
        """Families in which the individual is a husband or wife, in link order."""
        return [f for f in (self.family(fid) for fid in individual.family_spouse) if f is not None]

    def families_where_child(self, individual: Individual) -> List[Family]:
        """Families in which the individual is a child, in link order."""
        return [f for f in (self.family(fid) for fid in individual.family_child) if f is not None]

    def parents(self, individual: Individual) -> List[Individual]:
        """
        Get the known parents of an individual.

        Returns:
            List[Individual]: Husbands and wives of every family where the individual is a child.
        """
        parents = []
        for family in self.families_where_child(individual):
            for xref_id in family.spouses:
                parent = self.individual(xref_id)
                if parent is not None:
                    parents.append(parent)
        return parents

    def has_ancestors(self, individual: Optional[Individual]) -> bool:
        """True if at least one parent of the individual is recorded."""
        if individual is None:
            return False
        return bool(self.parents(individual))

    def is_trunk_family(self, family: Family) -> bool:
        """
        Check whether neither spouse of a family has known ancestors.

        Families with neither a husband nor a wife are not trunk families.
        """
        husband = self.individual(family.husband)
        wife = self.individual(family.wife)
        if husband is None and wife is None:
            logger.debug(f"Skipping family {family.xref_id} with neither husband nor wife")
            return False
        return not self.has_ancestors(husband) and not self.has_ancestors(wife)

    def trunk_families(self) -> List[Family]:
        """
        Get all families without known ancestors, in file order.

        Returns:
            List[Family]: The trunk families.
        """
        trunk = [family for family in self.families.values() if self.is_trunk_family(family)]
        logger.info(f"Found {len(trunk)} families without known ancestors")
        return trunk
