"""
Taskboard - minimal task-tracking HTTP API.
"""

__version__ = "1.0.0"
