"""adfsat/core — Types, exceptions, configuration and registry."""
