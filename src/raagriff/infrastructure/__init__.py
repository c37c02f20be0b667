"""Infrastructure layer: HTTP integrations, observability, app lifecycle."""
