"""Target language generators."""
