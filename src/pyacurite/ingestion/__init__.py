"""Ingestion layer.

Turns hub-detail payloads into normalized :class:`SensorReading` objects and
numeric channel values. Nothing here performs I/O.
"""
