"""Platform layer: external process execution."""

from relkit.platform.process import ProcessError, merged_env, run

__all__ = ["ProcessError", "merged_env", "run"]
