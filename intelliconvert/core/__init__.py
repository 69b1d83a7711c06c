"""Shared helpers used across intelliconvert subpackages."""
