"""
Application Layer

Ports to the outside world (voice transport, media resolver) and the
services that drive per-guild playback through them.
"""
