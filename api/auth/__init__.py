"""
Employee login and registration.
"""
