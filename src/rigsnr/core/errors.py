"""Error hierarchy for rig access.

Fatal errors carry the process exit status the CLI should return.
"""

from __future__ import annotations


class RigError(RuntimeError):
    """Base class for rig access failures."""

    exit_code: int = 1


class RigInitError(RigError):
    """The rig backend could not be initialised for the requested model."""

    exit_code = 1


class RigOpenError(RigError):
    """The rig was initialised but the link could not be opened."""

    exit_code = 2


class SampleReadError(RigError):
    """A single strength read failed. Always transient."""
