"""Terminal presentation helpers for nixdoc."""
