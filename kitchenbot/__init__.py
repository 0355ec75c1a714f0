"""Kitchen-scenario controller for a simulated mobile manipulator."""

__version__ = "0.1.0"
