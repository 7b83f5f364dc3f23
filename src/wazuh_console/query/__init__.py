"""Search query documents for the indexer."""
