"""
Core tolerance-comparison primitives, domain models and contracts.

This module contains the foundational building blocks that are independent
of file formats and the console driver.
"""
