"""Application layer: credential services orchestrating domain ports."""
