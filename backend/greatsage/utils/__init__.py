"""Derived-metrics and ordering helpers."""
