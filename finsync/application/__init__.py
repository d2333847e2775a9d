"""Application layer: commands, handlers, services and the insight cascade."""
