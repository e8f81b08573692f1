"""ancestry_tree package: Builds a balanced ancestry tree script from GEDCOM data."""

from ancestry_tree.birth_date import BirthDateInference, BirthDateMap
from ancestry_tree.config import TreeConfig
from ancestry_tree.create_tree import CreateTree
from ancestry_tree.family import Family
from ancestry_tree.gedcom_loader import GedcomLoader, GedcomLoadError
from ancestry_tree.individual import Individual
from ancestry_tree.life_event import LifeEvent
from ancestry_tree.record_set import RecordSet
from ancestry_tree.tree_builder import NodeCounter, TreeBuilder
from ancestry_tree.tree_script import render_script, write_script

__all__ = [
    "BirthDateInference",
    "BirthDateMap",
    "CreateTree",
    "Family",
    "GedcomLoader",
    "GedcomLoadError",
    "Individual",
    "LifeEvent",
    "NodeCounter",
    "RecordSet",
    "TreeBuilder",
    "TreeConfig",
    "render_script",
    "write_script",
]
