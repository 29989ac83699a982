"""Git access for the configuration checkout: clone, fetch and fast-forward."""
