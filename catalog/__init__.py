"""
catalog — Movies and actors.

Reads are public; writes require an access token from ``auth``.
"""
