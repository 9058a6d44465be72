"""Console rendering for the listing wizard."""
