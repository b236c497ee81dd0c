"""
Test configuration for Monkey interpreter tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from environment import new_environment
from interpreter import evaluate
from parsing import parse


def parse_valid(source):
  """Parse source and fail the test on any syntax error"""
  program, errors = parse(source)
  if errors:
    pytest.fail(f"parser has {len(errors)} errors:\n  " + "\n  ".join(errors))
  return program


@pytest.fixture
def run():
  """Evaluate source in a fresh root environment"""
  def _run(source):
    return evaluate(parse_valid(source), new_environment())
  return _run
