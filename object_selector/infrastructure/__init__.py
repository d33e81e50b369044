"""Infrastructure: persistence, registry, security and media adapters."""
