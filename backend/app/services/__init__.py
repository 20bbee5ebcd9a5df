"""Services Layer — session orchestration around the pure tree core.

Invariants:
    - Services never contain tree rules; they apply core results and perform IO

Design Decisions:
    - One explicitly owned EditorSession per process, created in the app lifespan
"""
