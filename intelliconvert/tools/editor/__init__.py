"""Page level PDF tools."""
