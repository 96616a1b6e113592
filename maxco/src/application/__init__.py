"""Application layer: composition root, startup checks and settings loading."""
