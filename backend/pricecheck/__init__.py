"""pricecheck: crowd-sourced grocery price reports with nearby comparisons."""

__version__ = "0.1.0"
