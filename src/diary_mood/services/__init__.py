"""Chunking, aggregation, classification and orchestration services."""
