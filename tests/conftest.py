from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.sketch_builder import SketchBuilder


@pytest.fixture
def sketch(tmp_path: Path) -> SketchBuilder:
    """Provide a sketch directory rooted at the pytest tmp_path."""
    return SketchBuilder(tmp_path)
