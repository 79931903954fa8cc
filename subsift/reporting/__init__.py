"""Output writers for SUBSIFT results."""
