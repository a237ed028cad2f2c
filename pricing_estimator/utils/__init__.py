from .logger import setup_logging
from .formatting import format_currency
from .parsing import parse_number

__all__ = ["setup_logging", "format_currency", "parse_number"]
