from awschime.signing.sigv4 import sign_request

__all__ = ["sign_request"]
