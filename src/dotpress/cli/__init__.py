"""Command line tools for dotpress."""
