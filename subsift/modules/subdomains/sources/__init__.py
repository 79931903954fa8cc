"""Built-in subdomain data sources."""

from subsift.modules.subdomains.sources.anubis import AnubisSource
from subsift.modules.subdomains.sources.base import SubdomainSource
from subsift.modules.subdomains.sources.crtsh import CrtShSource

__all__ = ["AnubisSource", "CrtShSource", "SubdomainSource"]
