"""Adapters connecting the domain to files, processes, HTTP and SQL."""
