"""HTTP API for building and rendering entry trees.

app.py defines the FastAPI application, models.py its pydantic schemas.
"""
