from __future__ import annotations
from pathlib import Path
from typing import List, Union

from .parser import parse_program
from .tree import Variable


def read_source(path: Union[str, Path]) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def load_program(path: Union[str, Path]) -> List[Variable]:
    """Read a script file and parse it into an ordered list of statements."""
    return parse_program(read_source(path))
