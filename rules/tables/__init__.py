"""Rule tables grouped by document section."""
