"""Click runtime for the code-assistant command line."""
