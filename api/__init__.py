"""Procurement Intelligence - HTTP API."""
