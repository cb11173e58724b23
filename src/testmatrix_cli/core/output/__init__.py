"""Verbosity-aware CLI output.

========  =========  =====================================
Level     Flag       User Sees
========  =========  =====================================
NORMAL    (default)  Results, errors, warnings
VERBOSE   -v         + Per-project decisions
DEBUG     -vvv       + Debug traces
========  =========  =====================================
"""

from testmatrix_cli.core.output.strategy import OutputStrategy
from testmatrix_cli.core.output.verbosity import Verbosity

__all__ = [
    "OutputStrategy",
    "Verbosity",
]
