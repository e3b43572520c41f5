"""Pokédex catalog service: CSV ingestion plus a FastAPI read/write API."""
