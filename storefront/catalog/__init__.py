"""Product catalog.

Category hierarchy, product filtering, catalog models and repositories.
"""
