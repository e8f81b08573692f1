"""
tree_script.py - Wrap the tree literal in the script read by the visualization.

The front end loads a small JavaScript file of the shape

    function userdata() { fulltree = new midnode("<TREE_LITERAL>;"); }

Module: ancestry_tree.tree_script
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import TreeConfig

logger = logging.getLogger(__name__)


def render_script(tree_literal: str, config: Optional[TreeConfig] = None) -> str:
    """
    Render the script text for a tree literal.

    Args:
        tree_literal (str): The tree literal, without the terminating ';'.
        config (Optional[TreeConfig]): Names to use; packaged defaults if omitted.

    Returns:
        str: The script text.
    """
    config = config if config is not None else TreeConfig.default()
    return (f'function {config.function_name}() {{ '
            f'{config.variable_name} = new {config.node_constructor}("{tree_literal};"); }}')


def write_script(text: str, output_path: Union[str, Path]) -> Path:
    """
    Write the script text, creating parent folders as needed.

    Args:
        text (str): Script text.
        output_path (Union[str, Path]): Destination file.

    Returns:
        Path: The absolute path written.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(text)
    written = output_path.resolve()
    logger.info(f"Wrote {written}")
    return written
