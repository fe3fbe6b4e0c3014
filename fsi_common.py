"""
Shared constants for fsinfo modules and the backend service.
"""

NAME = 'fsinfo'
KEY = b'fsinfo-backend'
