"""Configuration package for the stockroom database layer.

Settings are built from the environment when ``src.config.settings`` is first
imported, so this package does not import it eagerly. Test collection stays
free from environment requirements; import the module directly where needed.
"""

__all__: list[str] = []
