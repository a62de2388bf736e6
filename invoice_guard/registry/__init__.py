"""Read-only access to the order store used for cross-checks."""
