"""
Article Publishing Database Scripts

This package contains the database management scripts for the article
publishing system, organized into logical subdirectories:

- database/: Schema reset, sample data seeding, and schema verification
"""
