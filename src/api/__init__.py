"""
API Module
---------
Provides RESTful API endpoints for the campground using FastAPI.
Features include:
- Listing, creating, updating and deleting campsites
- Listing, booking and cancelling reservations
- Structured error responses for invalid requests
"""
