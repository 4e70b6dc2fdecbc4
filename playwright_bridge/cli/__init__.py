"""CLI module - boilerplate scaffolding and the demo server."""
