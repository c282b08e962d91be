"""Generated short-number metadata, one module per region."""
