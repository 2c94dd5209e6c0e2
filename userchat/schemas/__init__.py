"""Pydantic Schemas — validation of structured data arriving from the model.

Invariants:
    - Schemas validate at system boundary (model replies, tool inputs)

Design Decisions:
    - Separate from models: schemas are wire contracts, models are persistence
"""
