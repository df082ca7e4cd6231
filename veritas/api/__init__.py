"""HTTP surface of the Veritas engine."""
