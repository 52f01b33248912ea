"""covsync command line."""
