from .contracts import AdapterMeta, adapter, get_adapter_meta
from .registry import AdapterRegistry, AdapterRegistryError, build_default_registry
from .sinks import (
    FileByteSink,
    MemoryByteSink,
    PrefixingSink,
    StreamByteSink,
    sink_file,
    sink_memory,
    sink_stderr,
    sink_stdout,
)

__all__ = [
    "adapter",
    "AdapterMeta",
    "get_adapter_meta",
    "AdapterRegistry",
    "AdapterRegistryError",
    "build_default_registry",
    "FileByteSink",
    "MemoryByteSink",
    "PrefixingSink",
    "StreamByteSink",
    "sink_file",
    "sink_memory",
    "sink_stderr",
    "sink_stdout",
]
