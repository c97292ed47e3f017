"""
Pytest configuration and shared fixtures.
This file ensures the project root and the tests directory are in sys.path
so test modules can import the application packages and test_fixtures.
"""

import sys
from pathlib import Path

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
tests_dir = Path(__file__).parent
for path in (project_root, tests_dir):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
