"""Pytest configuration and fixtures for parcel classification tests."""

from pathlib import Path

import pytest

SAMPLE_DATA_DIR = Path(__file__).parent.parent / "sample-data"


@pytest.fixture
def sample_data_dir():
    return SAMPLE_DATA_DIR


@pytest.fixture
def mixed_batch_text():
    """Four zones and three parcels: parcel 1 -> VE, parcel 2 -> AE, parcel 3 clear."""
    return (SAMPLE_DATA_DIR / "parcel-1.txt").read_text()


@pytest.fixture
def write_input(tmp_path):
    """Write text to a file under tmp_path and return its path."""

    def _write(text, name="input.txt"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
