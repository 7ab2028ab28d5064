"""Kizhi line-stepping debugger package."""

from .debugger import Debugger  # noqa: F401
from .api import (  # noqa: F401
    load_program,
    dump_program,
    run_program,
    run_script,
)
