"""Release and config-file schema versions for eurlex_crawler."""

__all__ = ["__version__", "CONFIG_SCHEMA_VERSION"]

#: Package version, also reported by the HTTP API.
__version__ = "0.1.0"

#: Bump when a field of CrawlConfig is renamed or removed; see config.migrate_config.
CONFIG_SCHEMA_VERSION = 1
