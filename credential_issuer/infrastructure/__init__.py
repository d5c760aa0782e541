"""Infrastructure adapters (persistence, security, logging, notifications)."""
