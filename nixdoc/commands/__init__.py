"""CLI commands for nixdoc."""
