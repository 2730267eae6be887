"""Domain layer: content model, identifiers, ingest pipeline and ports."""
