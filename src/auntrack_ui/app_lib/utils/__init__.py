# Re-export for convenience
from .formatters import format_range, month_label, text_color_for
from .helpers import export_file_from_response

__all__ = [
    'format_range',
    'month_label',
    'text_color_for',
    'export_file_from_response',
]
