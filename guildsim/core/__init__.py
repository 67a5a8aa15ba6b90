"""Guild Core — 엔티티 규칙 계층"""
__version__ = "0.1.0"
