"""HTTP API for Catalyst Journal."""
