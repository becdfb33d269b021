import importlib.util
from pathlib import Path
import pytest

SCRIPTS_DIR = Path(__file__).resolve().parents[1] / 'scripts'


@pytest.fixture
def fetch_cli():
    spec = importlib.util.spec_from_file_location('fetch_blocktrail_data', SCRIPTS_DIR / 'fetch_blocktrail_data.py')
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
