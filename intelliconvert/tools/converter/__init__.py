"""Table conversion tool."""
