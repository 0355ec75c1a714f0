"""Host runtime adapters: the simulator link and a deterministic fake."""
