"""
Core - Shared infrastructure for the Abako apps

This module provides:
- Abstract base models (timestamps, display ordering)
- Role predicates and DRF permission classes
- Request-aware logging
"""
