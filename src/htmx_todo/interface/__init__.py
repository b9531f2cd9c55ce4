"""Outer surfaces: the HTTP server and the command line."""
