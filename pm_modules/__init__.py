"""
Project Management Modules.

Thin orchestration layers over the project management kernel.  Each module
contains domain entities, request structs, notifications, table definitions,
read selectors and a service facade.

Modules:
- Projects: projects, hierarchical tasks, employee assignments, progress
"""

from pm_modules import projects

__all__ = [
    "projects",
]
