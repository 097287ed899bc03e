"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `cachesim`
package without installing it, and provide small helpers to build caches and
trace files.
"""
import os
import sys

import pytest

# Compute project root: one directory above this file (tests -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import matplotlib
matplotlib.use('Agg') # no display in CI

from cachesim.ui import UI


@pytest.fixture(autouse=True)
def reset_ui_indentation():
    UI.indent_set(0)
    yield
    UI.indent_set(0)


@pytest.fixture
def write_trace(tmp_path):
    """write the given lines to a trace file and return its path"""
    def _write(lines, name='test.trace'):
        path = tmp_path / name
        path.write_text('\n'.join(lines) + '\n')
        return str(path)
    return _write
