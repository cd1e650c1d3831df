"""Dev server provisioner (Python-first, idempotent).

Core design goals:
- Detect the distribution, then drive its own package manager
- Idempotent steps: probe live OS state before changing it
- Fail fast on the first failing command, no rollback
- Centralized logging
"""

__all__ = []
