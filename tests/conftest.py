import sys
from pathlib import Path

import pytest

# Add repo root to Python path so `import app_core...` works in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def signal_csv_text() -> str:
    """Two days, two indicators."""
    return "date,foo_signal,bar_signal\n2024-01-01,buy,sell\n2024-01-02,hold,buy\n"
