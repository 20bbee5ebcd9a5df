"""Infrastructure Layer — persistence gateways and cross-cutting concerns.

Invariants:
    - Every gateway failure is raised as PersistenceError (or a subclass)
    - No retries: one attempt, fail fast

Design Decisions:
    - One module per storage backend; both satisfy core.repository_protocols.TreeRepository
"""
