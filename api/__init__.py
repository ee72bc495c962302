"""
FastAPI RESTful API for the Bookshop Review service.

This module provides a REST API for:
- Book catalog browsing and lookup by ISBN, author and title
- Customer registration and login
- Bearer token authentication
- Per-customer book reviews
"""
