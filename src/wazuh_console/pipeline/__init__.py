"""Background fetch pipeline and single-writer application state."""
