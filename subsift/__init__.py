"""SUBSIFT — passive subdomain enumeration from AnubisDB and crt.sh."""

__version__ = "0.1.0"
