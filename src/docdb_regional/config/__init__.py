"""Configuration module: client settings and static topology."""

from docdb_regional.config.settings import ClientSettings
from docdb_regional.config.topology import load_static_topology

__all__ = [
    "ClientSettings",
    "load_static_topology",
]
