"""Command line tools for ttygrid."""
