"""DAG Canvas - interactive task graph editor."""

__version__ = "0.1.0"
