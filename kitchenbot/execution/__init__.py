"""Routine data, the sequence engine, and the supervisory state machine."""
