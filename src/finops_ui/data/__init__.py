"""
Demo data for the finops UI.

Used by ``DemoResourceService`` for local development and tests without a
running REST API.

Modules:
- demo_records: seeded record generators per resource
"""
