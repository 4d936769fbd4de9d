"""
Data Models Module
----------------
Contains Pydantic models for request validation and response serialization.
Also holds the night count and cost calculation for reservations.
"""
