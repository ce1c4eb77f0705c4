"""Balcony glazing and facade modernization proposals from photos."""
