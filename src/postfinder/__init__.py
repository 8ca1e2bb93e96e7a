"""PostFinder - full-text and tag search for a static blog."""
