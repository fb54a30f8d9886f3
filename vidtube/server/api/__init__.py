"""HTTP API packages, one per version."""
