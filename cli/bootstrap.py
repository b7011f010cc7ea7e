"""Bootstrap module for CLI path setup.

This module handles sys.path manipulation before gymflow imports,
allowing `python cli/cli.py` to run from a source checkout.
"""

import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))
