"""End-to-end UI scenarios against a live EMPSD deployment."""
