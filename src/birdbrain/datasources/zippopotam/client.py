"""Zippopotam.us API constants.

API docs: https://docs.zippopotam.us/
"""

ZIP_LOOKUP_URL = "https://api.zippopotam.us/us"
