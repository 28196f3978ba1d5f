import pathlib
from typing import List, Union


def load_lines(file_path: Union[str, pathlib.Path]) -> List[str]:
    """Load the non-blank lines of an input file."""
    with open(file_path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]

