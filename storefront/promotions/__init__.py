"""Promotional entities: collections, discounts, sales and banners."""
