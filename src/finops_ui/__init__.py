"""
FinOps UI: a Reflex front-end for the finance operations API.

Screens cover the ledger (transactions, clients, banks, cards) and the
profiler (clients, banks, profiles, dashboard, transactions). Every list
shares one architecture:

- services: HTTP and in-memory demo data sources behind one interface
- store: per-collection state slices, reducers and request orchestration
- views: framework-independent controllers for list screens and forms
- state / components / app: the Reflex layer

Main entry points:
- app.main(): start the development server
- app.app: the Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
