"""Output sinks for exporting engine results."""

from paydone.sinks.console import ConsoleSink
from paydone.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
