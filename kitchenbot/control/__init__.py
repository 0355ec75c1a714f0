"""Actuator façade and action dispatch."""
