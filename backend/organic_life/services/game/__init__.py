"""Game domain services: state store, synthesis, derivations and timers.

This package contains pure(ish) domain logic that is imported by HTTP routes
and socket handlers, keeping transport concerns separated from core game
mechanics. Nothing here touches Flask or the database.
"""
