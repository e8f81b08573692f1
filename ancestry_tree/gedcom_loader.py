"""
gedcom_loader.py - GEDCOM loading utilities.

Defines the GedcomLoader class, which reads a GEDCOM file (or a zip archive
holding one) with ged4py and builds the RecordSet of individuals and
families used by the rest of the package. Birth dates are handed on as
GEDCOM date text, so ged4py DateValue objects are converted back to text.
"""
import os
import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ged4py.parser import GedcomReader
from ged4py.model import Record

from .family import Family
from .individual import Individual
from .record_set import RecordSet

logger = logging.getLogger(__name__)

# ged4py DateValue kind name -> GEDCOM keyword
DATE_KIND_KEYWORDS = {
    'ABOUT': 'ABT',
    'BEFORE': 'BEF',
    'AFTER': 'AFT',
    'CALCULATED': 'CAL',
    'ESTIMATED': 'EST',
    'FROM': 'FROM',
    'TO': 'TO',
}

# ged4py CalendarType name -> GEDCOM calendar escape; Gregorian is implied
CALENDAR_ESCAPES = {
    'JULIAN': '@#DJULIAN@',
    'HEBREW': '@#DHEBREW@',
    'FRENCH_R': '@#DFRENCH R@',
}


class GedcomLoadError(RuntimeError):
    """Raised when a GEDCOM file or archive cannot be read."""


def calendar_date_text(cal_date: Any) -> str:
    """
    GEDCOM text of a ged4py CalendarDate, e.g. '04 JUL 1776' or '1780/81'.

    Non-Gregorian dates keep their calendar escape ('@#DJULIAN@ 1700'), so they
    are not mistaken for Gregorian ones.

    Args:
        cal_date: ged4py CalendarDate-like object with year, month, day and optionally dual_year/bc.
    """
    if cal_date is None:
        return ''
    parts = []
    calendar = getattr(getattr(cal_date, 'calendar', None), 'name', None)
    if calendar in CALENDAR_ESCAPES:
        parts.append(CALENDAR_ESCAPES[calendar])
    day = getattr(cal_date, 'day', None)
    month = getattr(cal_date, 'month', None)
    year = getattr(cal_date, 'year', None)
    if day:
        parts.append(f"{int(day):02d}")
    if month:
        parts.append(str(month))
    if year is not None:
        year_text = str(year)
        dual_year = getattr(cal_date, 'dual_year', None)
        if dual_year is not None:
            year_text += f"/{int(dual_year) % 100:02d}"
        if getattr(cal_date, 'bc', False):
            year_text += " B.C."
        parts.append(year_text)
    return " ".join(parts)


def gedcom_date_text(value: Any) -> Optional[str]:
    """
    Convert a DATE value to GEDCOM date text.

    Accepts plain strings (returned stripped) and ged4py DateValue objects,
    which are rebuilt from their kind and calendar dates.

    Args:
        value: str, bytes, ged4py DateValue or None.

    Returns:
        Optional[str]: The date text, or None if empty.
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode('utf-8', errors='replace')
    if isinstance(value, str):
        return value.strip() or None

    kind = getattr(value, 'kind', None)
    kind_name = getattr(kind, 'name', None)
    if kind_name == 'SIMPLE':
        text = calendar_date_text(value.date)
    elif kind_name in DATE_KIND_KEYWORDS:
        text = f"{DATE_KIND_KEYWORDS[kind_name]} {calendar_date_text(value.date)}"
    elif kind_name == 'RANGE':
        text = f"BET {calendar_date_text(value.date1)} AND {calendar_date_text(value.date2)}"
    elif kind_name == 'PERIOD':
        text = f"FROM {calendar_date_text(value.date1)} TO {calendar_date_text(value.date2)}"
    elif kind_name == 'INTERPRETED':
        text = f"INT {calendar_date_text(value.date)} ({getattr(value, 'phrase', '')})"
    elif kind_name == 'PHRASE':
        text = getattr(value, 'phrase', None) or ''
    else:
        logger.debug(f"Unrecognised date value {value!r}, using its string form")
        text = str(value)
    return text.strip() or None


def pointer_xref(record: Optional[Record]) -> Optional[str]:
    """Xref id a pointer sub-record refers to, whether or not ged4py resolved it."""
    if record is None:
        return None
    xref_id = getattr(record, 'xref_id', None)
    if xref_id:
        return xref_id
    value = getattr(record, 'value', None)
    return value if isinstance(value, str) and value.startswith('@') else None


class GedcomLoader:
    """
    Loads individuals and families from a GEDCOM file.

    Attributes:
        gedcom_file (Path): Path to a .ged file or a .zip archive whose first entry is one.
    """
    __slots__ = ['gedcom_file']

    def __init__(self, gedcom_file: Union[str, Path]) -> None:
        """
        Initialize GedcomLoader.

        Args:
            gedcom_file (Union[str, Path]): Path to GEDCOM file or zip archive.
        """
        if gedcom_file is None:
            raise TypeError("gedcom_file must be a path")
        self.gedcom_file = Path(gedcom_file)

    def load(self) -> RecordSet:
        """
        Parse the file and build the record set.

        Returns:
            RecordSet: Individuals and families in file order.

        Raises:
            GedcomLoadError: If the file is missing, the archive is invalid, or parsing fails.
        """
        if not self.gedcom_file.exists():
            raise GedcomLoadError(f"GEDCOM file not found: {self.gedcom_file}")
        if zipfile.is_zipfile(self.gedcom_file):
            return self._load_archive()
        return self._load_gedcom(self.gedcom_file)

    def _load_archive(self) -> RecordSet:
        """Extract the first archive entry to a temporary file and parse it."""
        temp_fd, temp_path = tempfile.mkstemp(suffix='.ged')
        os.close(temp_fd)
        try:
            with zipfile.ZipFile(self.gedcom_file) as archive:
                entries = [info for info in archive.infolist() if not info.is_dir()]
                if not entries:
                    raise GedcomLoadError(f"Archive '{self.gedcom_file}' is empty")
                logger.info(f"Reading '{entries[0].filename}' from archive '{self.gedcom_file}'")
                with archive.open(entries[0]) as src, open(temp_path, 'wb') as dst:
                    dst.write(src.read())
            return self._load_gedcom(Path(temp_path))
        except zipfile.BadZipFile as e:
            raise GedcomLoadError(f"Invalid archive '{self.gedcom_file}': {e}") from e
        finally:
            os.remove(temp_path)

    def _load_gedcom(self, path: Path) -> RecordSet:
        try:
            with GedcomReader(str(path)) as reader:
                individuals = self._create_individuals(reader.records0('INDI'))
                families = self._create_families(reader.records0('FAM'))
        except GedcomLoadError:
            raise
        except Exception as e:
            logger.error(f"Error reading GEDCOM file '{self.gedcom_file}': {e}")
            raise GedcomLoadError(f"Error reading GEDCOM file '{self.gedcom_file}': {e}") from e

        self._link_families(individuals, families)
        logger.info(f"Loaded {len(individuals)} individuals and {len(families)} families")
        return RecordSet(individuals.values(), families.values())

    def _create_individual(self, record: Record) -> Individual:
        """
        Creates an Individual from an INDI record.

        Args:
            record (Record): GEDCOM record.

        Returns:
            Individual: Individual object.
        """
        individual = Individual(record.xref_id)
        name = record.sub_tag('NAME')
        individual.name = record.name.format() if name else ''
        if not individual.name:
            individual.name = 'Unknown'

        for birth in record.sub_tags('BIRT'):
            date = birth.sub_tag('DATE')
            individual.add_birth(
                date_text=gedcom_date_text(date.value) if date else None,
                place=birth.sub_tag_value('PLAC'),
                record=birth)

        individual.family_spouse = self._pointer_list(record.sub_tags('FAMS'))
        individual.family_child = self._pointer_list(record.sub_tags('FAMC'))
        return individual

    def _create_individuals(self, records) -> Dict[str, Individual]:
        individuals = {}
        for record in records:
            individuals[record.xref_id] = self._create_individual(record)
        return individuals

    def _create_families(self, records) -> Dict[str, Family]:
        families = {}
        for record in records:
            husbands = self._pointer_list(record.sub_tags('HUSB'))
            wives = self._pointer_list(record.sub_tags('WIFE'))
            if len(husbands) > 1 or len(wives) > 1:
                logger.warning(f"Family record {record.xref_id} has unexpected number of partners, using the first of each.")
            families[record.xref_id] = Family(
                xref_id=record.xref_id,
                husband=husbands[0] if husbands else None,
                wife=wives[0] if wives else None,
                children=self._pointer_list(record.sub_tags('CHIL')))
        return families

    @staticmethod
    def _pointer_list(records) -> List[str]:
        return [xref for xref in (pointer_xref(r) for r in records) if xref]

    @staticmethod
    def _link_families(individuals: Dict[str, Individual], families: Dict[str, Family]) -> None:
        """
        Complete FAMS/FAMC links from the FAM records.

        Exports do not always write both directions of a link.
        """
        for family in families.values():
            for xref_id in family.spouses:
                individual = individuals.get(xref_id)
                if individual is None:
                    logger.warning(f"Family {family.xref_id} refers to unknown individual {xref_id}")
                elif family.xref_id not in individual.family_spouse:
                    individual.family_spouse.append(family.xref_id)
            for xref_id in family.children:
                individual = individuals.get(xref_id)
                if individual is None:
                    logger.warning(f"Family {family.xref_id} refers to unknown child {xref_id}")
                elif family.xref_id not in individual.family_child:
                    individual.family_child.append(family.xref_id)
