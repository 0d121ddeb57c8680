"""Interface layer - command line."""
