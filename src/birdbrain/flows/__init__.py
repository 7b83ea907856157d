"""Request pipelines.

  - hotspots.py  HotspotFinder: origin → hotspots → activity → ranking
"""
