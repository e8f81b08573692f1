import zipfile
import pytest
from datetime import date
from types import SimpleNamespace

from ancestry_tree.birth_date import BirthDateInference
from ancestry_tree.gedcom_loader import (
    GedcomLoader,
    GedcomLoadError,
    calendar_date_text,
    gedcom_date_text,
    pointer_xref,
)


def cal(year, month=None, day=None, dual_year=None, calendar=None):
    calendar_type = SimpleNamespace(name=calendar) if calendar else None
    return SimpleNamespace(year=year, month=month, day=day, dual_year=dual_year, bc=False, calendar=calendar_type)


def date_value(kind, **kwargs):
    return SimpleNamespace(kind=SimpleNamespace(name=kind), **kwargs)


@pytest.mark.parametrize("value,expected", [
    (cal(1776, "JUL", 4), "04 JUL 1776"),
    (cal(1776, "JUL"), "JUL 1776"),
    (cal(1776), "1776"),
    (cal(1780, dual_year=81), "1780/81"),
    (cal(1780, dual_year=1781), "1780/81"),
    (cal(1776, "JUL", 4, calendar="GREGORIAN"), "04 JUL 1776"),
    (cal(1700, calendar="JULIAN"), "@#DJULIAN@ 1700"),
    (cal(5500, "TSH", 1, calendar="HEBREW"), "@#DHEBREW@ 01 TSH 5500"),
    (cal(11, "VEND", calendar="FRENCH_R"), "@#DFRENCH R@ VEND 11"),
    (None, ""),
])
def test_calendar_date_text(value, expected):
    assert calendar_date_text(value) == expected


@pytest.mark.parametrize("value,expected", [
    (None, None),
    ("", None),
    ("  ABT 1776 ", "ABT 1776"),
    (b"BET 1770 AND 1780", "BET 1770 AND 1780"),
    (date_value("SIMPLE", date=cal(1776, "JUL", 4)), "04 JUL 1776"),
    (date_value("ABOUT", date=cal(1780, dual_year=81)), "ABT 1780/81"),
    (date_value("BEFORE", date=cal(1776)), "BEF 1776"),
    (date_value("AFTER", date=cal(1776, "JUL")), "AFT JUL 1776"),
    (date_value("RANGE", date1=cal(1770), date2=cal(1780)), "BET 1770 AND 1780"),
    (date_value("PERIOD", date1=cal(1770), date2=cal(1780)), "FROM 1770 TO 1780"),
    (date_value("ESTIMATED", date=cal(1776)), "EST 1776"),
    (date_value("PHRASE", phrase="Q1 1776"), "Q1 1776"),
    (date_value("ABOUT", date=cal(1700, calendar="JULIAN")), "ABT @#DJULIAN@ 1700"),
])
def test_gedcom_date_text(value, expected):
    assert gedcom_date_text(value) == expected


def test_rebuilt_text_feeds_inference():
    inference = BirthDateInference()
    text = gedcom_date_text(date_value("ABOUT", date=cal(1780, dual_year=81)))
    assert inference.parse_date_text(text) == date(1780, 7, 2)


@pytest.mark.parametrize("value", [
    date_value("SIMPLE", date=cal(1700, calendar="JULIAN")),
    date_value("ABOUT", date=cal(1700, "MAR", calendar="JULIAN")),
])
def test_non_gregorian_dates_are_not_inferred(value):
    """A Julian year must not be read as the Gregorian year with the same number."""
    text = gedcom_date_text(value)
    assert BirthDateInference().parse_date_text(text) is None


def test_pointer_xref():
    assert pointer_xref(None) is None
    assert pointer_xref(SimpleNamespace(xref_id="@F1@", value=None)) == "@F1@"
    assert pointer_xref(SimpleNamespace(xref_id=None, value="@F2@")) == "@F2@"
    assert pointer_xref(SimpleNamespace(xref_id=None, value="text")) is None


def test_load_gedcom_file(gedcom_file):
    record_set = GedcomLoader(gedcom_file).load()
    assert list(record_set.individuals) == ["@I1@", "@I2@", "@I3@", "@I4@", "@I5@"]
    assert list(record_set.families) == ["@F1@", "@F2@", "@F3@"]

    john = record_set.individual("@I1@")
    assert "John" in john.name and "Smith" in john.name
    assert john.family_spouse == ["@F1@"]
    assert [e.what for e in john.birth_events] == ["BIRT"]
    assert john.birth_events[0].place == "Boston"
    assert john.birth_events[0].record.tag == "BIRT"
    assert john.birth_events[0].record.sub_tag_value("PLAC") == "Boston"

    william = record_set.individual("@I3@")
    assert william.family_child == ["@F1@"]
    assert william.family_spouse == ["@F2@"]

    f1 = record_set.family("@F1@")
    assert (f1.husband, f1.wife, f1.children) == ("@I1@", "@I2@", ["@I3@"])
    f3 = record_set.family("@F3@")
    assert (f3.husband, f3.wife, f3.children) == ("@I5@", None, [])


def test_loaded_birth_dates(gedcom_file):
    record_set = GedcomLoader(gedcom_file).load()
    birth_dates = BirthDateInference().infer_all(record_set.individuals.values())
    assert birth_dates == {
        "@I1@": date(1776, 7, 4),
        "@I2@": date(1780, 1, 1),
        "@I3@": date(1805, 1, 1),
        "@I5@": date(1750, 1, 1),
    }


def test_loaded_trunk_families(gedcom_file):
    record_set = GedcomLoader(gedcom_file).load()
    assert [f.xref_id for f in record_set.trunk_families()] == ["@F1@", "@F3@"]


def test_load_zip_archive(gedcom_file, tmp_path):
    archive = tmp_path / "family.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.write(gedcom_file, arcname="Archdale.ged")
    record_set = GedcomLoader(archive).load()
    assert len(record_set.individuals) == 5
    assert len(record_set.families) == 3


def test_missing_file(tmp_path):
    with pytest.raises(GedcomLoadError):
        GedcomLoader(tmp_path / "missing.ged").load()


def test_empty_archive(tmp_path):
    archive = tmp_path / "empty.zip"
    with zipfile.ZipFile(archive, "w"):
        pass
    with pytest.raises(GedcomLoadError):
        GedcomLoader(archive).load()


def test_requires_path():
    with pytest.raises(TypeError):
        GedcomLoader(None)
