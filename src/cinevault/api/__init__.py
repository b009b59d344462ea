"""API module for Cinevault.

API layer:
- Parses multipart forms, reads/writes DB through the repository
- Returns movie JSON payloads
- Forbidden: direct SDK calls to the image provider
"""
