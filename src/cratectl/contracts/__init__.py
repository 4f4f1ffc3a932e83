"""Output contracts for machine-readable reports."""
