"""
awschime

Amazon Chime command-line client: SigV4 request signing, an async resource
client for meetings, attendees and channels, and a local credential store.
"""

__version__ = "1.0.0"
