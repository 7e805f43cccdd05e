"""Wave API infrastructure package.

This package provides a minimal client for the Wave music-search API:
a search endpoint returning JSON items and a thumbnail endpoint returning
raw image bytes.
"""
