"""HTTP clients for the update graph service."""
