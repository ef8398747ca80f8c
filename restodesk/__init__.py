"""
                RestoDesk

Backend for restaurant owners: accounts, restaurants and menus,
order tracking, and delivery-distance enrichment of order lists.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
