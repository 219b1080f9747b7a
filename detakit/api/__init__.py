"""
DetaKit - API Package

This package contains the HTTP request client for the Deta services.
"""

from .deta_client import DetaClient, RequestOutput, API_KEY_HEADER

__all__ = ['DetaClient', 'RequestOutput', 'API_KEY_HEADER']
