"""Abstract interfaces for dialect emitters and metadata sources."""

from .emitter import DdlEmitter, index_name
from .metadata_source import ColumnMetadataSource, build_table

__all__ = [
    "DdlEmitter",
    "ColumnMetadataSource",
    "build_table",
    "index_name",
]
