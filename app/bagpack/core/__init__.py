"""Core collection pipeline: normalization, aggregation and scheduling."""
