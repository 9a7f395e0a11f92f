"""Locating and reading classification input files."""

from pathlib import Path
from typing import Union

INPUT_EXTENSION = ".txt"


def has_valid_extension(path: Union[str, Path]) -> bool:
    return str(path).endswith(INPUT_EXTENSION)


def read_input_file(path: Union[str, Path]) -> str:
    """Read an input file as text.

    Args:
        path: Path to a .txt input file

    Returns:
        The full file contents

    Raises:
        ValueError: If the path does not end in .txt
        FileNotFoundError: If the file doesn't exist
    """
    if not has_valid_extension(path):
        raise ValueError(f"Invalid file format. File must be a {INPUT_EXTENSION} file: {path}")

    input_file = Path(path)
    if not input_file.is_file():
        raise FileNotFoundError(f"File not found: {input_file}")

    with open(input_file, "r", encoding="utf-8") as f:
        return f.read()
