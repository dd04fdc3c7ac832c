"""HTTP API for the training journal."""
