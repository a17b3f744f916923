"""
Database Management Scripts

This module contains utilities for database operations:
- Schema management (drop, create, seed)
- Database reset and verification
"""
