"""testlang command line interface."""
