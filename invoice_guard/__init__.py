"""
Top-level package for the invoice authenticity service.

The service exposes a FastAPI app (see `main.py`) with:

- GET /health
- POST /invoices
- POST /verify
"""
