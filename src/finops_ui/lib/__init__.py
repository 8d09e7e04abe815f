"""
Small infrastructure helpers shared across the UI.

Modules:
    logs: Logger factory
    objects: Stable hashing and JSON rendering
    paths: Temp and cache directories
    clients: Pooled HTTP client
    caches: Disk-backed TTL cache
"""

from finops_ui.lib import caches, clients, logs, objects, paths

__all__ = ["caches", "clients", "logs", "objects", "paths"]
