"""Store module for e-commerce functionality.

Provides the catalogue, shopping cart, checkout and the daily sales
analytics behind the /api/ JSON endpoints.
"""
