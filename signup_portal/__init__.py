"""Browser signup form backed by a remote signup service."""
