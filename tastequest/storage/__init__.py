"""
Persistence layer.

Responsibilities:
- Define the async key/value Persistence Gateway contract.
- Provide in-memory and JSON-file gateways.
- Load typed session state with documented defaults, and save it back.
"""
