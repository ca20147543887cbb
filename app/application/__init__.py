"""Application layer: repository ports, services and DTOs.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the repository interfaces.
"""
