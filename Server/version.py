"""
FileDepot Server - Version

Single source of the server version.
"""

VERSION = "1.0.0"
