"""
Pulse Kernel - shared infrastructure for the ProjectPulse analytics core.

- SQLAlchemy declarative base with UUID keys and audit timestamps
- Engine and session management
- Injectable clock
- Typed exception hierarchy with stable error codes
- Structured JSON logging
- Read-only selector base
"""

__version__ = "0.1.0"
