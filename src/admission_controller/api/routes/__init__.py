"""API route modules.

Route organization:
- admission: One POST endpoint per configured webhook path
- health: Liveness probe
"""

from . import admission, health

__all__ = ["admission", "health"]
