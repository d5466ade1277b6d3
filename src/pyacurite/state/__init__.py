"""State layer.

Holds the only cross-cycle mutable state besides the session: the
last-propagated value per registry key and the key → handle map.
"""
