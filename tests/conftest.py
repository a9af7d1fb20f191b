import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from cropstage.core.geometry import StageBounds  # noqa: E402
from cropstage.session import CropSession  # noqa: E402


@pytest.fixture
def stage() -> StageBounds:
    """The 400 x 300 stage used throughout the crop scenarios."""
    return StageBounds(400, 300)


@pytest.fixture
def redraws() -> list[int]:
    return []


@pytest.fixture
def session(stage: StageBounds, redraws: list[int]) -> CropSession:
    """A free-mode session that records every redraw request."""
    return CropSession(stage, on_redraw=lambda: redraws.append(1))
