"""HTTP surface for the health analyzer webhook."""
