"""
Project Management Kernel

Shared infrastructure for the project management plugin:
- Structured JSON logging
- Typed exceptions with stable codes
- Injectable clock
- SQLAlchemy engine, sessions and a parameterized SQL gateway
- Locked-counter identity allocation
- Employee directory lookups
- Synchronous event dispatch
"""

__version__ = "0.1.0"
