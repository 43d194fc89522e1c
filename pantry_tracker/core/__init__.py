"""Core utilities and shared application primitives.

Modules in this package hold configuration, the item model, errors,
validation and the HTTP middleware shared by the app.
"""
