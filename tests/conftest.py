"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Global registry isolation so macros registered by one test do not leak.
"""

import sys
import pytest
from pathlib import Path

# Add src to path so we can import 'macro_contract' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from macro_contract.core.registry import clear_macros  # noqa: E402


@pytest.fixture(autouse=True)
def clean_registry():
  """Ensure the macro registry starts empty and is reset afterwards."""
  clear_macros()
  yield
  clear_macros()


@pytest.fixture
def script_dir(tmp_path):
  """
  Creates a directory holding one external macro script and one
  unrelated helper module without a declaration header.
  """
  directory = tmp_path / "macro_scripts"
  directory.mkdir()

  (directory / "shout.py").write_text(
    '''#! MACRO: function(shout)

def expand(input_fragment, arguments_text=None):
    return input_fragment.strip().upper()
''',
    encoding="utf-8",
  )
  (directory / "helpers.py").write_text("VALUE = 1\n", encoding="utf-8")
  (directory / "__init__.py").touch()
  return directory
