"""
Pytest fixtures for ancestry_tree tests.
"""
from __future__ import annotations

import locale

import pytest
from dataclasses import dataclass, field
from datetime import date as _date
from typing import Iterable, List, Optional

from ancestry_tree.family import Family
from ancestry_tree.individual import Individual
from ancestry_tree.record_set import RecordSet

TODAY = _date(2012, 10, 22)


class RecordSetBuilder:
    """Builds small record sets with FAMS/FAMC links filled in both directions."""

    def __init__(self):
        self.individuals: List[Individual] = []
        self.families: List[Family] = []
        self._by_id = {}

    def person(self, xref_id: str, name: str = None, *birth_dates: Optional[str]) -> str:
        individual = Individual(xref_id, name if name is not None else xref_id)
        for birth_date in birth_dates:
            individual.add_birth(birth_date)
        self.individuals.append(individual)
        self._by_id[xref_id] = individual
        return xref_id

    def family(self, xref_id: str, husband: str = None, wife: str = None, children: Iterable[str] = ()) -> Family:
        family = Family(xref_id, husband=husband, wife=wife, children=list(children))
        for spouse in family.spouses:
            self._by_id[spouse].family_spouse.append(xref_id)
        for child in family.children:
            self._by_id[child].family_child.append(xref_id)
        self.families.append(family)
        return family

    def build(self) -> RecordSet:
        return RecordSet(self.individuals, self.families)


@pytest.fixture(autouse=True)
def c_numeric_locale():
    """Ages are asserted in the C locale; restores whatever locale a test switched to."""
    saved = locale.setlocale(locale.LC_ALL)
    locale.setlocale(locale.LC_NUMERIC, 'C')
    yield
    locale.setlocale(locale.LC_ALL, saved)


@pytest.fixture
def records():
    """A fresh RecordSetBuilder."""
    return RecordSetBuilder()


@pytest.fixture
def today():
    return TODAY


@dataclass
class NewickNode:
    label: str
    length: Optional[str]
    children: List["NewickNode"] = field(default_factory=list)

    def postorder(self):
        for child in self.children:
            yield from child.postorder()
        yield self

    def leaves(self):
        return [n for n in self.postorder() if not n.children]

    def internal_ids(self):
        return [int(n.label) for n in self.postorder() if n.children]


def parse_newick(text: str) -> NewickNode:
    """Minimal Newick reader: '(a:1,b:2)3:0;' -> NewickNode tree."""
    text = text[:-1] if text.endswith(';') else text
    pos = 0

    def read_token(stops: str) -> str:
        nonlocal pos
        start = pos
        while pos < len(text) and text[pos] not in stops:
            pos += 1
        return text[start:pos]

    def parse_node() -> NewickNode:
        nonlocal pos
        children = []
        if pos < len(text) and text[pos] == '(':
            pos += 1
            children.append(parse_node())
            while text[pos] == ',':
                pos += 1
                children.append(parse_node())
            if text[pos] != ')':
                raise ValueError(f"Expected ')' at {pos} in {text!r}")
            pos += 1
        label = read_token(',():')
        length = None
        if pos < len(text) and text[pos] == ':':
            pos += 1
            length = read_token(',()')
        return NewickNode(label, length, children)

    node = parse_node()
    if pos != len(text):
        raise ValueError(f"Trailing text at {pos} in {text!r}")
    return node


@pytest.fixture
def newick():
    return parse_newick


GEDCOM_TEXT = """0 HEAD
1 SOUR ancestry_tree_tests
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 04 JUL 1776
2 PLAC Boston
1 FAMS @F1@
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
1 BIRT
2 DATE ABT 1780
1 FAMS @F1@
0 @I3@ INDI
1 NAME William /Smith/
1 SEX M
1 BIRT
2 DATE BET 1800 AND 1810
1 FAMC @F1@
1 FAMS @F2@
0 @I4@ INDI
1 NAME Sarah /Brown/
1 SEX F
1 FAMS @F2@
0 @I5@ INDI
1 NAME Thomas /Green/
1 SEX M
1 BIRT
2 DATE 1750
1 FAMS @F3@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
0 @F2@ FAM
1 HUSB @I3@
1 WIFE @I4@
0 @F3@ FAM
1 HUSB @I5@
0 TRLR
"""


@pytest.fixture
def gedcom_file(tmp_path):
    """A small GEDCOM file: two trunk families, one with a married child."""
    path = tmp_path / "family.ged"
    path.write_text(GEDCOM_TEXT, encoding="utf-8")
    return path
