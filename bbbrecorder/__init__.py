"""WebRTC recording helpers: RTP buffering, NACKs, EBML elements, events and configuration."""

__version__ = "0.1.0"