"""Pydantic Schemas — request/response validation and persisted document shape.

Invariants:
    - Schemas validate at system boundaries (user input, API responses, loaded documents)
    - Domain types from core/ are converted here, never the other way around

Design Decisions:
    - Separate from models: schemas are contracts, models are persistence
"""
