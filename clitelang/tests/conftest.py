"""
Pytest configuration for CLite tests.
"""
from pathlib import Path
import sys


# The clite entry script sits at the project root, next to the package.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
