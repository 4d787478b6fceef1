"""Prometheus monitoring."""
