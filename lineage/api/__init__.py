"""REST API for the location lineage service."""
