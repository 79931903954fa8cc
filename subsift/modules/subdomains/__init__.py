"""Subdomain enumeration module and its data sources."""
