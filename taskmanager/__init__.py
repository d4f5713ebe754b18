"""
Task Manager - user-scoped task tracking with JWT authentication.
"""

__version__ = "0.1.0"
