"""Book validation API.

A small FastAPI service that fetches a book by numeric identifier and accepts
new books after validating the request body against a fixed record schema.
"""

__version__ = "0.1.0"
