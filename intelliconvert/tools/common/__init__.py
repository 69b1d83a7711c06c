"""Shared context and registry for intelliconvert tools."""
