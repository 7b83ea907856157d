"""
Shared service utilities.

- http.py - requests Session factory (default timeout, no retries)
"""
