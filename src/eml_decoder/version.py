"""
Version constants for the message decoder.

Bump DECODER_VERSION whenever decoding output can change for the same input.
"""

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
DECODER_VERSION = "mime-decoder-1.0.0"
