"""
create_tree.py - Build the ancestry tree script from a GEDCOM file.

This module defines the CreateTree class, which runs the whole pipeline:
    - Loading the GEDCOM file or archive
    - Inferring birth dates
    - Selecting, sorting and composing the trunk families
    - Rendering and writing the visualization script

It also provides the command line entry point.

Module: ancestry_tree.create_tree
"""

from __future__ import annotations

import argparse
import locale
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from .app_hooks import AppHooks
from .birth_date import BirthDateInference, BirthDateMap
from .config import TreeConfig
from .gedcom_loader import GedcomLoader, GedcomLoadError
from .record_set import RecordSet
from .tree_builder import TreeBuilder
from .tree_script import render_script, write_script

logger = logging.getLogger(__name__)


class CreateTree:
    """
    Runs one tree build.

    Attributes:
        config (TreeConfig): Output and formatting settings.
        app_hooks (Optional[AppHooks]): Optional application hooks for progress reporting.
        today (date): Reference date for all ages, captured when the run starts.
        birth_date_inference (BirthDateInference): Date inference engine.
    """
    __slots__ = [
        'config',
        'app_hooks',
        'today',
        'birth_date_inference',
    ]
    def __init__(self, config: Optional[TreeConfig] = None, app_hooks: Optional[AppHooks] = None, today: Optional[date] = None) -> None:
        self.config = config if config is not None else TreeConfig.default()
        self.app_hooks = app_hooks
        self.today = today
        self.birth_date_inference = BirthDateInference()

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """
        Report a step via app hooks if available.

        Args:
            info (str): Information message.
            target (int): Target count for progress.
            reset_counter (bool): Whether to reset the counter.
            plus_step (int): Incremental step count.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        else:
            logger.info(info)

    def infer_birth_dates(self, record_set: RecordSet) -> BirthDateMap:
        self._report_step("Inferring birth dates", target=len(record_set), reset_counter=True)
        return self.birth_date_inference.infer_all(record_set.individuals.values())

    def build_tree_literal(self, record_set: RecordSet, today: Optional[date] = None) -> str:
        """
        Build the tree literal for a record set.

        Args:
            record_set (RecordSet): Individuals and families.
            today (Optional[date]): Reference date; the run's date, or today, if omitted.

        Returns:
            str: The tree literal, without the terminating ';'.
        """
        today = today or self.today or date.today()
        birth_dates = self.infer_birth_dates(record_set)
        builder = TreeBuilder(record_set, birth_dates, today=today, config=self.config)

        trunk_families = record_set.trunk_families()
        self._report_step("Building tree", target=len(trunk_families), reset_counter=True)
        tree_literal = builder.build(builder.sort_families(trunk_families))
        logger.debug(f"Tree uses {builder.counter.value - 1} internal nodes")
        return tree_literal

    def run(self, gedcom_file: Union[str, Path], output_path: Optional[Union[str, Path]] = None) -> str:
        """
        Build the script for a GEDCOM file and write it.

        Args:
            gedcom_file (Union[str, Path]): GEDCOM file or zip archive.
            output_path (Optional[Union[str, Path]]): Destination; config.output_path if omitted.

        Returns:
            str: The script text written.

        Raises:
            GedcomLoadError: If the GEDCOM input cannot be read.
        """
        self.today = self.today or date.today()
        self._report_step(f"Loading {gedcom_file}", reset_counter=True)
        record_set = GedcomLoader(gedcom_file).load()

        script = render_script(self.build_tree_literal(record_set, self.today), self.config)
        write_script(script, output_path if output_path is not None else self.config.output_path)
        return script


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the ancestry tree script from a GEDCOM file"
    )
    parser.add_argument(
        "gedcom_file",
        help="Path to GEDCOM file or zip archive",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output script path (default: output_path from config)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="YAML file overriding the default configuration",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        locale.setlocale(locale.LC_ALL, '')
    except locale.Error as e:
        logger.warning(f"Unable to use the environment locale, ages use the C locale: {e}")

    config = TreeConfig.from_yaml(Path(args.config)) if args.config else TreeConfig.default()
    try:
        CreateTree(config=config).run(args.gedcom_file, args.output)
    except GedcomLoadError as e:
        logger.error(str(e))
        return 1
    return 0
