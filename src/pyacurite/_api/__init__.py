"""Endpoint modules for the MyAcuRite API."""
