"""Enumeration modules for SUBSIFT."""
