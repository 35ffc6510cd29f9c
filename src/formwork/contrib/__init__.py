"""Optional framework integrations.

Each submodule imports its framework at module level; install the
matching extra (``formwork[starlette]``) before importing it.
"""
