"""
Liveness endpoints and unknown-route handling.
"""
