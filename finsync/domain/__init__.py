"""Domain layer: canonical records, credentials, errors and collaborator protocols."""
