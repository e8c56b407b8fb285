"""Build-time services: message parsing and catalogue compilation."""

from .catalog_compiler import BatchReport, CompileResult, compile_catalogues, run_compile_messages
from .message_compiler import compile_file, load_source_catalogue
from .messageformat import format_message, parse_message, print_message

__all__ = [
    "BatchReport",
    "CompileResult",
    "compile_catalogues",
    "compile_file",
    "format_message",
    "load_source_catalogue",
    "parse_message",
    "print_message",
    "run_compile_messages",
]
