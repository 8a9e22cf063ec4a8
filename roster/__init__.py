"""
Team Manager application package.

Layered the same way throughout:

  roster/stores/        — durable string-keyed blob storage (file, SQL, memory).
  roster/codec.py       — JSON encoding of the two persisted collections.
  roster/repositories/  — in-memory collections with save-through to a store.
  roster/services/      — form handling and derived views (schedule, summary).

``TeamManager`` (in ``team_manager.py``) is the integration point: it builds
the store, constructs and hydrates each repository once, and wires the
services that the command-line front end calls into.
"""
