"""
Contact Management App

Handles the public contact form:
- submission validation and storage
- customer auto-reply and owner notification emails
- admin inbox with read/replied tracking and direct email replies
"""
