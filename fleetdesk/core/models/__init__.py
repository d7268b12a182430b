"""API-facing schemas, kept apart from the database entities."""
