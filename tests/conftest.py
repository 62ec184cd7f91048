import sys
import pathlib
import pytest

# Project root on sys.path so url_report and urlhits_core import without install
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def write_log(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name: str, content: str) -> pathlib.Path:
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return path
    return _write
