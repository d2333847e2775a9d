"""Infrastructure layer: provider adapters, insight generators, stores, logging."""
