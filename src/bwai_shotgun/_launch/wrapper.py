# Area: Launch
"""
bwai_shotgun._launch.wrapper — Execution wrapper
================================================

Decorates a command with the configured sandbox or compatibility layer.
Launch builders treat it as opaque: they hand it the program to run and
append their own arguments to whatever comes back.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, model_validator


class ExecutionWrapper(BaseModel):
    """How engine and bot executables are started.

    kind:
      - ``none``: run the program directly
      - ``wine``: run through ``wine`` (default outside Windows)
      - ``sandboxie``: run inside a Sandboxie box
    """

    kind: Literal["none", "wine", "sandboxie"] = "none"
    executable: Optional[Path] = None
    box_name: Optional[str] = None

    @model_validator(mode="after")
    def check_sandboxie(self) -> "ExecutionWrapper":
        if self.kind == "sandboxie" and (not self.executable or not self.box_name):
            raise ValueError("sandboxie wrapper needs 'executable' and 'box_name'")
        return self

    @classmethod
    def default(cls) -> "ExecutionWrapper":
        if sys.platform == "win32":
            return cls(kind="none")
        return cls(kind="wine")

    def wrap(self, program: Union[str, "os.PathLike[str]"]) -> List[str]:
        """Return the argv prefix that starts ``program``."""
        program = os.fspath(program)
        if self.kind == "sandboxie":
            return [
                os.fspath(self.executable),
                "/wait",
                "/silent",
                f"/box:{self.box_name}",
                program,
            ]
        if self.kind == "wine":
            return ["wine", program]
        return [program]
